"""
Placeholder substitution.

Replaces already-recognized regions of a text with unique synthetic tokens so
another pass (item splitting, a Markdown engine) cannot see inside them, then
maps the tokens back.

Tokens have the form PREFIX + counter and are unique within one PlaceholderMap.
A map is created fresh for every call that needs one; nothing is shared.

Known limitation: user text that literally contains PREFIX followed by digits
is indistinguishable from a token and will be substituted.
"""

import re
from typing import Dict, Generic, List, TypeVar, Union

T = TypeVar("T")


class PlaceholderMap(Generic[T]):
    """
    Per-call registry of placeholder token -> original value.

    The split() method views a processed string as a rope with holes: a
    sequence of plain text segments and the registered values.

    Example:
        >>> placeholders = PlaceholderMap("ENV_")
        >>> token = placeholders.add(r"\\begin{enumerate}\\item x\\end{enumerate}")
        >>> token
        'ENV_0'
        >>> placeholders.split("before ENV_0 after")
        ['before ', '\\\\begin{enumerate}\\\\item x\\\\end{enumerate}', ' after']
    """

    def __init__(self, prefix: str):
        self.prefix = prefix
        self._values: Dict[str, T] = {}
        self._counter = 0
        self._token_re = re.compile(re.escape(prefix) + r"\d+")

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, token: str) -> bool:
        return token in self._values

    def add(self, value: T) -> str:
        """Register a value and return its new token."""
        token = f"{self.prefix}{self._counter}"
        self._counter += 1
        self._values[token] = value
        return token

    def get(self, token: str) -> T:
        return self._values[token]

    def tokens(self) -> List[str]:
        return list(self._values)

    def split(self, text: str) -> List[Union[str, T]]:
        """
        Split text into plain segments and registered values.

        Empty text segments are dropped. Token-shaped text that was never
        registered stays as text.
        """
        parts: List[Union[str, T]] = []
        last = 0

        for match in self._token_re.finditer(text):
            token = match.group(0)
            # Longest registered token wins: PREFIX1 must not eat PREFIX12
            while token not in self._values and len(token) > len(self.prefix) + 1:
                token = token[:-1]
            if token not in self._values:
                continue

            if match.start() > last:
                parts.append(text[last : match.start()])
            parts.append(self._values[token])
            last = match.start() + len(token)

        if last < len(text):
            parts.append(text[last:])

        return parts

    def restore(self, text: str) -> str:
        """
        Substitute string values back into text.

        Only meaningful when the registered values are strings.
        """
        return "".join(str(part) for part in self.split(text))
