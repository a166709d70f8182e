"""Form code lookup table."""

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, field_validator

REGISTRATION = "registration"
REGISTRATION_LMP = "registrationLmp"
DELIVERY = "delivery"
VISIT = "visit"
FLAG = "flag"

DEFAULT_FORM_CODES: Mapping[str, str] = MappingProxyType(
    {
        REGISTRATION: "R",
        REGISTRATION_LMP: "P",
        DELIVERY: "D",
        VISIT: "V",
        FLAG: "F",
    }
)


class FormCodeNotConfiguredError(KeyError):
    """Raised when a logical form name has no configured form code."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No form code configured for '{name}'")

    def __str__(self) -> str:
        return self.args[0]


class FormCodeMap(BaseModel):
    """Immutable mapping of logical form names to external form codes."""

    model_config = ConfigDict(frozen=True)

    codes: Mapping[str, str]

    @field_validator("codes", mode="after")
    @classmethod
    def freeze_codes(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    def code_for(self, name: str) -> str:
        """Return the form code for a logical form name.

        Raises:
            FormCodeNotConfiguredError: If the name has no code
        """
        try:
            return self.codes[name]
        except KeyError:
            raise FormCodeNotConfiguredError(name) from None
