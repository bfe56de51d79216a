from dataclasses import asdict, fields
from typing import Self


class SheetsResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Gives every resource struct the same way in (from_base) and out (to_base)
    of the raw dicts the generated API client deals in.
    """
    @classmethod
    def from_base(cls, data: dict|Self|None) -> Self:
        """
        Build the resource from a raw API dict.  The API adds fields over
        time so anything the dataclass doesn't declare is dropped rather
        than blowing up the constructor.
        """
        if isinstance(data, cls):
            return data
        raw = dict(data or {})
        known = {f.name for f in fields(cls) if f.init}
        return cls(**{k: v for k, v in raw.items() if k in known})

    def to_base(self) -> dict:
        """
        Default just return the dict representation of the object as needed by
        the API client.  Something more complicated can override.
        Call fixup() first to ensure all fields are in correct format.
        """
        self.fixup()
        return asdict(self)

    def trim(self) -> dict:
        """
        Return the dict with top level attributes that are None or empty
        containers/strings removed.  Numbers and bools are always kept since
        0 and False are legitimate values.  For requests that only want the
        filled-in fields.
        """
        b = self.to_base()
        for k, v in list(b.items()):
            if v is None or (type(v) not in [int, bool, float] and not v):
                del b[k]
        return b

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass
