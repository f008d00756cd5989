from dataclasses import asdict, fields, is_dataclass
from typing import Any

def _drop_none(value: Any) -> Any:
    """Recursively remove None values from dicts, lists are walked but kept"""
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(v) for v in value]
    return value

class GoogleWorkSpaceResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Subclasses that need field conversions after init call fixup() from
    their own __post_init__.
    """
    def to_base(self) -> dict:
        """
        Default just return the dict representation of the object as needed by
        the GWS client, with None fields removed at every level.  Optional
        request fields are None when not set and the service treats a missing
        key as 'unbounded' or 'leave alone', so they must not be sent.
        Call fixup() first to ensure all fields are in correct format.
        """
        self.fixup()
        return _drop_none(asdict(self))

    def trim(self) -> dict:
        """
        Return a 'trimmed' dict of the resource.  That is, also removing any top
        level attributes that are empty strings or containers.  Numbers and bools
        are kept even when falsy since 0 and False are valid values.
        """
        b = self.to_base()
        for k, v in list(b.items()):
            if type(v) not in [int, bool, float] and not v:
                del b[k]
        return b

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass

    @classmethod
    def from_base(cls, base: dict|None):
        """
        Build from a service response dict.  Responses carry more fields than
        we model and new ones appear over time, so unknown keys are dropped
        rather than passed to __init__.
        """
        b = dict(base or {})
        if is_dataclass(cls):
            names = {f.name for f in fields(cls) if f.init}
            b = {k: v for k, v in b.items() if k in names}
        return cls(**b)
