"""Expression trees evaluated against rows.

A row is any sequence of field values indexed by column position. A value
of ``None`` is SQL NULL. Comparisons and logic operations evaluate to a
``CmpBool``, which is three-valued.
"""

from abc import ABC, abstractmethod
from enum import Enum, IntEnum, auto


class TypeId(Enum):
    """Type of a field value."""

    INVALID = auto()
    INT = auto()
    FLOAT = auto()
    CHAR = auto()


class ExpressionType(Enum):
    """Kind of expression node."""

    LOGIC = 0
    COMPARISON = 1
    COLUMN = 2
    CONSTANT = 3


class CmpBool(IntEnum):
    """Three-valued result of a comparison."""

    FALSE = 0
    TRUE = 1
    NULL = 2

    @classmethod
    def of(cls, value):
        """Convert a plain truth value to ``TRUE`` or ``FALSE``."""
        return cls.TRUE if value else cls.FALSE


class LogicType(Enum):
    """Logic operation joining two predicates."""

    AND = "and"
    OR = "or"


class AbstractExpression(ABC):
    """Base of all expression nodes; each node may have children."""

    def __init__(self, children, ret_type, expression_type):
        self._children = tuple(children)
        self.return_type = ret_type
        self.expression_type = expression_type

    @property
    def children(self):
        """The child expressions, in order."""
        return self._children

    def child_at(self, index):
        """The child expression at ``index``."""
        return self._children[index]

    @abstractmethod
    def evaluate(self, row):
        """Value of this expression for ``row``."""

    @abstractmethod
    def evaluate_join(self, left_row, right_row):
        """Value of this expression for a joined pair of rows."""


class ColumnValueExpression(AbstractExpression):
    """Reference to one column of a row, or of one side of a join."""

    def __init__(self, row_idx, col_idx, ret_type):
        super().__init__((), ret_type, ExpressionType.COLUMN)
        self.row_idx = row_idx
        self.col_idx = col_idx

    def evaluate(self, row):
        return row[self.col_idx]

    def evaluate_join(self, left_row, right_row):
        row = left_row if self.row_idx == 0 else right_row
        return row[self.col_idx]

    def __repr__(self):
        return f"ColumnValueExpression(row_idx={self.row_idx}, col_idx={self.col_idx})"


_TYPE_OF = ((bool, TypeId.INT), (int, TypeId.INT), (float, TypeId.FLOAT), (str, TypeId.CHAR))


def _infer_type(value):
    for python_type, type_id in _TYPE_OF:
        if isinstance(value, python_type):
            return type_id
    raise TypeError(f"cannot infer a field type for {value!r}")


class ConstantValueExpression(AbstractExpression):
    """A constant value; ``None`` stands for NULL and needs an explicit type."""

    def __init__(self, value, ret_type=None):
        if ret_type is None:
            if value is None:
                raise TypeError("a NULL constant needs an explicit type")
            ret_type = _infer_type(value)
        super().__init__((), ret_type, ExpressionType.CONSTANT)
        self.value = value

    def evaluate(self, row):
        return self.value

    def evaluate_join(self, left_row, right_row):
        return self.value

    def __repr__(self):
        return f"ConstantValueExpression({self.value!r}, {self.return_type.name})"


def _null_aware(op):
    def compare(lhs, rhs):
        if lhs is None or rhs is None:
            return CmpBool.NULL
        return CmpBool.of(op(lhs, rhs))

    return compare


_COMPARISONS = {
    "=": _null_aware(lambda a, b: a == b),
    "<>": _null_aware(lambda a, b: a != b),
    "<": _null_aware(lambda a, b: a < b),
    "<=": _null_aware(lambda a, b: a <= b),
    ">": _null_aware(lambda a, b: a > b),
    ">=": _null_aware(lambda a, b: a >= b),
    "is": lambda lhs, rhs: CmpBool.of(lhs is None),
    "not": lambda lhs, rhs: CmpBool.of(lhs is not None),
}


class ComparisonExpression(AbstractExpression):
    """Two expressions compared with one of ``= <> < <= > >= is not``.

    ``is`` tests the left side for NULL and ``not`` for not NULL.
    """

    def __init__(self, left, right, comp_type):
        super().__init__((left, right), TypeId.INT, ExpressionType.COMPARISON)
        self.comp_type = comp_type

    def evaluate(self, row):
        return self._compare(self.child_at(0).evaluate(row), self.child_at(1).evaluate(row))

    def evaluate_join(self, left_row, right_row):
        lhs = self.child_at(0).evaluate_join(left_row, right_row)
        rhs = self.child_at(1).evaluate_join(left_row, right_row)
        return self._compare(lhs, rhs)

    def _compare(self, lhs, rhs):
        try:
            operation = _COMPARISONS[self.comp_type]
        except KeyError:
            raise ValueError(f"unsupported comparison type {self.comp_type!r}") from None
        return operation(lhs, rhs)

    def __repr__(self):
        return f"ComparisonExpression({self.child_at(0)!r} {self.comp_type} {self.child_at(1)!r})"


def _as_cmp_bool(value):
    if value is None or value is CmpBool.NULL:
        return CmpBool.NULL
    return CmpBool.TRUE if value == 1 else CmpBool.FALSE


class LogicExpression(AbstractExpression):
    """Two boolean expressions joined by AND or OR under three-valued logic."""

    def __init__(self, left, right, logic_type):
        super().__init__((left, right), TypeId.INT, ExpressionType.LOGIC)
        if left.return_type != TypeId.INT or right.return_type != TypeId.INT:
            raise TypeError("expect boolean from either side")
        self.logic_type = logic_type

    @staticmethod
    def type_from_name(name):
        """The logic type named ``and`` or ``or``."""
        try:
            return LogicType(name)
        except ValueError:
            raise ValueError(f"unsupported logic type {name!r}") from None

    def evaluate(self, row):
        return self._compute(self.child_at(0).evaluate(row), self.child_at(1).evaluate(row))

    def evaluate_join(self, left_row, right_row):
        lhs = self.child_at(0).evaluate_join(left_row, right_row)
        rhs = self.child_at(1).evaluate_join(left_row, right_row)
        return self._compute(lhs, rhs)

    def _compute(self, lhs, rhs):
        left, right = _as_cmp_bool(lhs), _as_cmp_bool(rhs)
        if self.logic_type is LogicType.AND:
            if CmpBool.FALSE in (left, right):
                return CmpBool.FALSE
            if left is CmpBool.TRUE and right is CmpBool.TRUE:
                return CmpBool.TRUE
            return CmpBool.NULL
        if self.logic_type is LogicType.OR:
            if left is CmpBool.FALSE and right is CmpBool.FALSE:
                return CmpBool.FALSE
            if CmpBool.TRUE in (left, right):
                return CmpBool.TRUE
            return CmpBool.NULL
        raise ValueError(f"unsupported logic type {self.logic_type!r}")

    def __repr__(self):
        return f"LogicExpression({self.child_at(0)!r} {self.logic_type.value} {self.child_at(1)!r})"