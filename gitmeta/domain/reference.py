"""
Reference domain objects for gitmeta.

A reference names a buildable or invokable unit, optionally bound to a remote
location (git URL plus a tag/branch/hash selector) or to a local path. The
set of variants is closed: Target and Command. Both share the Reference
shape so code that rewrites references can be written once.

String form:
    +name                        unit in the current directory
    ./some/dir+name              unit in a local directory
    github.com/org/repo:v1+name  unit in a remote repository at a selector
    alias+name                   unit reached through an import alias
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Type


@dataclass(frozen=True)
class Reference:
    """Common shape shared by all reference variants."""
    name: str
    git_url: str = ""
    tag: str = ""
    local_path: str = ""
    import_ref: str = ""

    kind = "reference"

    @property
    def is_local_internal(self) -> bool:
        return not self.git_url and not self.import_ref and self.local_path in ("", ".")

    def with_remote(self, git_url: str, tag: str, local_path: str) -> 'Reference':
        """Create a new reference of the same variant with a new remote location."""
        return replace(self, git_url=git_url, tag=tag, local_path=local_path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'name': self.name,
            'git_url': self.git_url,
            'tag': self.tag,
            'local_path': self.local_path,
            'import_ref': self.import_ref,
            'reference': str(self),
        }

    def __str__(self) -> str:
        if self.import_ref:
            return f"{self.import_ref}+{self.name}"
        if self.git_url:
            if self.tag:
                return f"{self.git_url}:{self.tag}+{self.name}"
            return f"{self.git_url}+{self.name}"
        if self.is_local_internal:
            return f"+{self.name}"
        return f"{self.local_path}+{self.name}"


@dataclass(frozen=True)
class Target(Reference):
    """A buildable target."""
    kind = "target"


@dataclass(frozen=True)
class Command(Reference):
    """An invokable command."""
    kind = "command"


REFERENCE_TYPES = (Target, Command)

_KINDS: Dict[str, Type[Reference]] = {cls.kind: cls for cls in REFERENCE_TYPES}


def parse_reference(text: str, kind: str = "target") -> Reference:
    """
    Parse a reference string into a Target or Command.

    The name is everything after the last "+", so a name cannot contain
    "+" (a location or selector can). The selector is split off at the last
    ":" only when no "/" follows it, since "host:path" is also a valid
    remote form; a selector containing "/" (e.g. "release/1.0") therefore
    stays part of git_url. Build such references with Target/Command
    directly.

    Args:
        text: Reference such as "github.com/org/repo:v1.0+build" or "./lib+test"
        kind: "target" or "command"

    Returns:
        Reference of the requested variant

    Raises:
        ValueError: If the string has no "+name" part or the kind is unknown
    """
    cls = _KINDS.get(kind)
    if cls is None:
        raise ValueError(f"Unknown reference kind: {kind}")

    prefix, sep, name = text.strip().rpartition("+")
    if not sep or not name:
        raise ValueError(f"Invalid reference {text!r}: expected <location>+<name>")

    if not prefix:
        return cls(name=name, local_path=".")
    if prefix.startswith((".", "/", "~")):
        return cls(name=name, local_path=prefix)
    if "/" not in prefix and "." not in prefix and ":" not in prefix:
        return cls(name=name, import_ref=prefix)

    # A ":" after the last "/" separates the selector from the URL
    head, colon, tail = prefix.rpartition(":")
    if colon and head and "/" not in tail:
        return cls(name=name, git_url=head, tag=tail)
    return cls(name=name, git_url=prefix)
