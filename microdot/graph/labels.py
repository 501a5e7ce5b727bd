"""Label micro-language parsing.

Node labels are free text with three kinds of embedded markup:

- hashtags such as ``#risk``, used for categorisation and colouring;
- subgraph markers, hashtags with the ``SG_`` prefix such as ``#SG_backend``,
  which group nodes into a visual cluster;
- variables such as ``$cost=3d``, typed via ``Value.infer``.

Parsing is pure: annotations are recomputed from the label on every access
and never cached on the node.
"""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from microdot.errors import VariableParseError
from microdot.graph.values import Value

logger = logging.getLogger("microdot.graph.labels")

SUBGRAPH_PREFIX = "SG_"

HASHTAG_RE = re.compile(r"#[A-Za-z][A-Za-z0-9_-]*")
TRAILING_HASHTAG_RE = re.compile(r"#[A-Za-z][A-Za-z0-9_-]*$")
VARIABLE_RE = re.compile(r"\$([A-Za-z][A-Za-z0-9_-]*)=(\S+)")
_SPACE_RUN_RE = re.compile(r"[ \t]{2,}")


@dataclass(frozen=True, order=True)
class HashTag:
    """A ``#Token`` marker; ordering and equality follow the tag text."""

    tag: str

    def stable_hash(self) -> int:
        """Process-independent hash of the tag text, used to pick a colour series."""
        digest = hashlib.sha256(self.tag.encode("utf-8")).hexdigest()
        return int(digest[:16], 16)

    def is_subgraph(self) -> bool:
        return self.tag.startswith("#" + SUBGRAPH_PREFIX)

    @property
    def name(self) -> str:
        """Tag text without the leading ``#``."""
        return self.tag[1:]

    def __str__(self) -> str:
        return self.tag


@dataclass(frozen=True)
class Variable:
    """A ``$name=value`` assignment."""

    name: str
    value: Value

    @classmethod
    def parse(cls, text: str) -> Variable:
        """Parse a single variable token.

        Raises:
            VariableParseError: If ``text`` holds no ``$name=value`` token.
        """
        match = VARIABLE_RE.search(text)
        if not match:
            raise VariableParseError(f"could not parse variable: {text}")
        return cls(match.group(1), Value.infer(match.group(2)))

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


@dataclass(frozen=True)
class NodeAnnotations:
    """Everything extracted from one label."""

    display_text: str
    tags: FrozenSet[HashTag] = field(default_factory=frozenset)
    variables: Dict[str, Variable] = field(default_factory=dict)
    subgraph: Optional[HashTag] = None

    def sorted_tags(self) -> Tuple[HashTag, ...]:
        return tuple(sorted(self.tags))

    def variable_value(self, name: str) -> Optional[Value]:
        variable = self.variables.get(name)
        return variable.value if variable is not None else None


def extract_variables(text: str) -> Tuple[Dict[str, Variable], str]:
    """Pull every variable token out of ``text``.

    When a name is assigned more than once the last assignment wins.

    Returns:
        Tuple[Dict[str, Variable], str]: Variables keyed by name and the text
        with the tokens removed.
    """
    variables: Dict[str, Variable] = {}
    for match in VARIABLE_RE.finditer(text):
        name = match.group(1)
        if name in variables:
            logger.debug("Variable %s reassigned in label; keeping last value", name)
        variables[name] = Variable(name, Value.infer(match.group(2)))
    return variables, VARIABLE_RE.sub("", text)


def extract_hashtags(text: str) -> Tuple[FrozenSet[HashTag], str]:
    """Collect hashtags and strip the ones at the end of ``text``.

    Trailing hashtags are removed repeatedly, so a label ending in several
    tags loses all of them; a hashtag in the middle of the text stays.

    Returns:
        Tuple[FrozenSet[HashTag], str]: All tags found and the trimmed text.
    """
    tags = frozenset(HashTag(tag) for tag in HASHTAG_RE.findall(text))

    remaining = text.strip()
    while True:
        match = TRAILING_HASHTAG_RE.search(remaining)
        if not match:
            break
        remaining = remaining[: match.start()].strip()

    return tags, remaining


def parse_label(label: str) -> NodeAnnotations:
    """Parse raw label text into its annotations."""
    variables, without_variables = extract_variables(label)
    tags, display_text = extract_hashtags(without_variables)
    display_text = _SPACE_RUN_RE.sub(" ", display_text).strip()

    subgraph_tags = sorted(tag for tag in tags if tag.is_subgraph())
    subgraph = subgraph_tags[0] if subgraph_tags else None
    if len(subgraph_tags) > 1:
        logger.debug(
            "Label has %d subgraph markers; using %s", len(subgraph_tags), subgraph
        )

    return NodeAnnotations(
        display_text=display_text,
        tags=frozenset(tag for tag in tags if not tag.is_subgraph()),
        variables=variables,
        subgraph=subgraph,
    )
