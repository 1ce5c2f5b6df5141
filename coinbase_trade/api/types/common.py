"""Building blocks shared by the API type modules."""

from enum import Enum

from ..error import InvalidParameterError


class ApiEnum(str, Enum):
    """String enum that reads unseen server values as its UNKNOWN member.

    Subclasses list their ``UNKNOWN_*`` member first. Values coming from the
    caller go through :meth:`strict` instead, so a typo is never sent as
    ``UNKNOWN_*``.
    """

    @classmethod
    def _missing_(cls, value):
        return next(iter(cls.__members__.values()))

    @classmethod
    def strict(cls, value, name: str = ""):
        """Look up a declared, non-UNKNOWN member.

        Raises:
            InvalidParameterError: If ``value`` names no such member.
        """
        unknown = next(iter(cls.__members__.values()))
        member = value if isinstance(value, cls) else cls._value2member_map_.get(value)
        if member is None or member is unknown:
            valid = ", ".join(m.value for m in cls if m is not unknown)
            raise InvalidParameterError(f"invalid {name or cls.__name__} {value!r}; expected one of {valid}")
        return member
