from beartype.vale import Is
from beartype.vale._core._valecore import BeartypeValidator


def _is_number(x: object) -> bool:
    return isinstance(x, int | float) and not isinstance(x, bool)


def one_of(*elements: object) -> BeartypeValidator:

    def _one_of(x: object, elements: tuple[object, ...]) -> bool:
        return x in elements

    return Is[lambda x: _one_of(x, elements)]


def ge(val: float) -> BeartypeValidator:

    def _ge(x: object, val: float) -> bool:
        return _is_number(x) and x >= val

    return Is[lambda x: _ge(x, val)]


def gt(val: float) -> BeartypeValidator:

    def _gt(x: object, val: float) -> bool:
        return _is_number(x) and x > val

    return Is[lambda x: _gt(x, val)]


def le(val: float) -> BeartypeValidator:

    def _le(x: object, val: float) -> bool:
        return _is_number(x) and x <= val

    return Is[lambda x: _le(x, val)]
