"""GroupVersionKind: the fully qualified identifier of a resource type.

The string form is ``<group>/<version>.<kind>``, for example
``core.hydra.io/v1alpha1.Singleton``. The group is a dotted name; although it
is expected to contain at least one dot, that is not enforced.
"""

from __future__ import annotations

from dataclasses import dataclass


class FormatError(ValueError):
    """Raised when a GroupVersionKind string lacks a required separator."""


@dataclass(frozen=True)
class GroupVersionKind:
    group: str
    version: str
    kind: str

    @classmethod
    def new(cls, group: str, version: str, kind: str) -> "GroupVersionKind":
        """Build a GroupVersionKind from its parts without checking them."""
        return cls(group=group, version=version, kind=kind)

    @classmethod
    def parse(cls, value: str) -> "GroupVersionKind":
        """Parse ``group/version.kind``.

        The group is split off at the first ``/`` and the remainder at its
        first ``.``, so dots are allowed in the group and in the kind but not
        in the version.
        """
        group, slash, remainder = value.partition("/")
        if not slash:
            raise FormatError("missing version and kind")

        version, dot, kind = remainder.partition(".")
        if not dot:
            raise FormatError("missing kind")

        return cls(group=group, version=version, kind=kind)

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return f"{self.group}/{self.version}.{self.kind}"
