"""Exception types for reference-data loading and build-code conversion.

Two families:
  - ReferenceDataError: raised by the repository and allowed to propagate,
    a partially loaded table is never treated as valid.
  - BuildCodeError: raised inside the codec and transformer, converted to a
    failed result object at their public boundary.
"""


class ReferenceDataError(Exception):
    """Base class for reference table load failures."""


class FetchFailure(ReferenceDataError):
    """The transport reported a non-success status for a document."""


class SchemaFailure(ReferenceDataError):
    """A document has the wrong top-level shape."""


class ValidationFailure(ReferenceDataError):
    """A record inside a document breaks a structural invariant."""

    def __init__(self, table: str, record: str, problem: str) -> None:
        self.table = table
        self.record = record
        self.problem = problem
        super().__init__(f"Invalid {table} data: {problem} for {record}")


class BuildCodeError(Exception):
    """Base class for build-code decode/encode failures."""

    kind = "BuildCodeError"


class NoBuildCode(BuildCodeError):
    kind = "NoBuildCode"


class MalformedBuildCode(BuildCodeError):
    kind = "MalformedBuildCode"


class UnknownPerkList(BuildCodeError):
    kind = "UnknownPerkList"


class UnknownGameMechanics(BuildCodeError):
    kind = "UnknownGameMechanics"


class ByteRangeError(BuildCodeError):
    """A field value does not fit in one unsigned byte."""

    kind = "ByteRangeError"


# Warning prefix for race/stone/blessing values with no table entry.
UNRESOLVED_REFERENCE = "UnresolvedReference"
