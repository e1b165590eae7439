"""Reduce HTML to displayable text with a tag-depth scanner."""

from dataclasses import dataclass, field


@dataclass
class ExtractionState:
    """
    Scanner state for one extraction.

    ``depth`` counts unmatched ``<``. A ``>`` at depth 0 is ignored, so
    unbalanced markup degrades instead of underflowing.
    """

    track_body: bool = True
    depth: int = 0
    tag: list[str] = field(default_factory=list)
    seen_body_open: bool = False
    seen_body_close: bool = False
    output: list[str] = field(default_factory=list)
    # Every depth-0 character, used when no body tag shows up.
    stripped: list[str] = field(default_factory=list)

    def feed(self, c: str) -> None:
        if c == "<":
            self.tag.clear()
            self.depth += 1
        elif c == ">":
            if self.depth == 0:
                return
            self._close_tag("".join(self.tag))
            self.tag.clear()
            self.depth -= 1
        elif self.depth == 0:
            self.stripped.append(c)
            if self.in_body:
                self.output.append(c)
        else:
            self.tag.append(c)

    def _close_tag(self, name: str) -> None:
        if not self.track_body:
            return
        # Prefix match: <body class="x"> and <bodyfoo> both open the body.
        if name.startswith("body"):
            self.seen_body_open = True
        elif name.startswith("/body") and self.seen_body_open:
            self.seen_body_close = True

    @property
    def in_body(self) -> bool:
        return self.seen_body_open and not self.seen_body_close

    def result(self) -> str:
        if self.track_body and self.seen_body_open:
            return "".join(self.output)
        return "".join(self.stripped)


def show_body(text: str) -> str:
    """Text inside <body>...</body> with all tags removed."""
    state = ExtractionState()
    for c in text:
        state.feed(c)
    return state.result()


def strip_tags(status: int, text: str) -> str:
    """Every character outside tags, prefixed with the status code."""
    state = ExtractionState(track_body=False)
    for c in text:
        state.feed(c)
    return f"{status} {state.result()}"


def extract(status: int, text: str) -> str:
    """
    Turn a decoded response into displayable text.

    For 200 responses only the contents of the body element are kept
    (or the whole document's text when it has no body tag). Other statuses
    keep all text outside tags, after the status code. Entities are not
    decoded.
    """
    if status == 200:
        return show_body(text)
    return strip_tags(status, text)
