"""Parsing of mustache templates into text fragments and tag actions.

A parsed template alternates between literal text and tags: fragment ``i``
is the text that precedes action ``i``, and the final action is always an
``IGNORE`` placeholder that follows the last fragment.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_DEFAULT_OPEN = "{{"
_DEFAULT_CLOSE = "}}"


class InvalidTemplateError(ValueError):
    """Raised when a template cannot be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(f"template error: {message}")
        self.detail = message


class ActionType(Enum):
    """What a tag asks the renderer to do."""

    IGNORE = "ignore"
    TAG = "tag"
    UNESCAPE_TAG = "unescape_tag"
    OPEN_BLOCK = "open_block"
    CLOSE_BLOCK = "close_block"
    ELSE_BLOCK = "else_block"
    PARTIAL = "partial"


@dataclass
class Action:
    """One tag: its kind, the span of its name in the body, and a position.

    For an opening or inverted block ``pos`` is the index of the matching
    closing action; for a closing block it is the index of the opening one;
    for a standalone partial it is the indentation in front of the tag.
    """

    type: ActionType
    start: int
    end: int
    pos: int = 0


@dataclass(frozen=True)
class ParsedTemplate:
    """The body of a template together with its fragments and actions."""

    body: str
    fragments: tuple[tuple[int, int], ...]
    actions: tuple[Action, ...]

    def tag_name(self, action: Action) -> str:
        """Return the name written inside the tag of ``action``."""
        return self.body[action.start:action.end]


def _trim_span(body: str, start: int, end: int) -> tuple[int, int]:
    while start < len(body) and body[start] == " ":
        start += 1
    while end > 0 and body[end - 1] == " ":
        end -= 1
    return start, end


def _parse_delimiters(body: str, idx: int, end: int) -> tuple[str, str]:
    """Read the new open and close delimiters of a ``{{=... ...=}}`` tag."""
    end -= 1
    if end < 0 or body[end] != "=":
        raise InvalidTemplateError("{{=: not matching = tag: " + body[idx:end])
    end -= 1
    while idx < len(body) and body[idx] == " ":
        idx += 1
    while end >= 0 and body[end] == " ":
        end -= 1
    end += 1

    space = body.find(" ", idx, end) if idx < end else -1
    if space == -1:
        raise InvalidTemplateError("{{=: cannot find space between new open/close tags")
    tag_open = body[idx:space]
    rest = space
    while rest < len(body) and body[rest] == " ":
        rest += 1
    tag_close = body[rest:end]
    if not tag_open:
        raise InvalidTemplateError("{{=: empty open tag")
    if not tag_close:
        raise InvalidTemplateError("{{=: empty close tag")
    if " " in tag_close:
        raise InvalidTemplateError("{{=: invalid open/close tag: " + tag_open + " " + tag_close)
    return tag_open, tag_close


def _scan(body: str) -> tuple[list[tuple[int, int]], list[Action]]:
    tag_open, tag_close = _DEFAULT_OPEN, _DEFAULT_CLOSE
    fragments: list[tuple[int, int]] = []
    actions: list[Action] = []
    open_blocks: list[int] = []
    current = 0

    while True:
        idx = body.find(tag_open, current)
        if idx == -1:
            fragments.append((current, len(body)))
            actions.append(Action(ActionType.IGNORE, 0, 0))
            break
        fragments.append((current, idx))

        idx += len(tag_open)
        end = body.find(tag_close, idx)
        if end == idx:
            raise InvalidTemplateError("empty tag is not allowed")
        if end == -1:
            raise InvalidTemplateError("not matched opening tag")
        current = end + len(tag_close)

        sigil = body[idx]
        if sigil in "#^":
            start, stop = _trim_span(body, idx + 1, end)
            open_blocks.append(len(actions))
            kind = ActionType.OPEN_BLOCK if sigil == "#" else ActionType.ELSE_BLOCK
            actions.append(Action(kind, start, stop))
        elif sigil == "/":
            start, stop = _trim_span(body, idx + 1, end)
            if not open_blocks:
                raise InvalidTemplateError("closing tag without opening tag: " + body[start:stop])
            opener_index = open_blocks.pop()
            opener = actions[opener_index]
            opened = body[opener.start:opener.end]
            closed = body[start:stop]
            if opened != closed:
                raise InvalidTemplateError(f"not matched {{{{# {{{{/ pair: {opened}, {closed}")
            opener.pos = len(actions)
            actions.append(Action(ActionType.CLOSE_BLOCK, start, stop, opener_index))
        elif sigil == "!":
            actions.append(Action(ActionType.IGNORE, idx + 1, end))
        elif sigil == ">":
            start, stop = _trim_span(body, idx + 1, end)
            actions.append(Action(ActionType.PARTIAL, start, stop))
        elif sigil == "{":
            if tag_open != _DEFAULT_OPEN or tag_close != _DEFAULT_CLOSE:
                raise InvalidTemplateError("cannot use triple mustache when delimiter changed")
            if end + 2 >= len(body) or body[end + 2] != "}":
                raise InvalidTemplateError("{{{: }}} not matched")
            start, stop = _trim_span(body, idx + 1, end)
            actions.append(Action(ActionType.UNESCAPE_TAG, start, stop))
            current += 1
        elif sigil == "&":
            start, stop = _trim_span(body, idx + 1, end)
            actions.append(Action(ActionType.UNESCAPE_TAG, start, stop))
        elif sigil == "=":
            actions.append(Action(ActionType.IGNORE, idx + 1, end))
            tag_open, tag_close = _parse_delimiters(body, idx + 1, end)
        else:
            start, stop = _trim_span(body, idx, end)
            actions.append(Action(ActionType.TAG, start, stop))

    return fragments, actions


def _is_line_break_at(body: str, k: int) -> bool:
    if k >= len(body):
        return False
    if body[k] == "\n":
        return True
    return body[k] == "\r" and k + 1 < len(body) and body[k + 1] == "\n"


def _remove_standalones(body: str, fragments: list[tuple[int, int]], actions: list[Action]) -> None:
    """Drop the whitespace and line break around tags that stand on their own line."""
    last = len(actions) - 2
    for i in range(last, -1, -1):
        action = actions[i]
        if action.type in (ActionType.TAG, ActionType.UNESCAPE_TAG):
            continue
        before_start, before_end = fragments[i]
        after_start, after_end = fragments[i + 1]

        j = before_end - 1
        while j >= before_start and body[j] == " ":
            j -= 1
        all_space_before = j < before_start
        if all_space_before and i > 0:
            continue
        if not all_space_before and body[j] != "\n":
            continue

        k = after_start
        limit = min(len(body), after_end)
        while k < limit and body[k] == " ":
            k += 1
        all_space_after = k >= limit
        if all_space_after and i != last:
            continue
        if not all_space_after and not _is_line_break_at(body, k):
            continue

        if action.type is ActionType.PARTIAL:
            action.pos = before_end - j - 1
        fragments[i] = (before_start, j + 1)
        if not all_space_after:
            k += 1 if body[k] == "\n" else 2
            fragments[i + 1] = (k, after_end)


def parse(body: str) -> ParsedTemplate:
    """Parse a template body; raise InvalidTemplateError if it is malformed."""
    fragments, actions = _scan(body)
    _remove_standalones(body, fragments, actions)
    return ParsedTemplate(body=body, fragments=tuple(fragments), actions=tuple(actions))