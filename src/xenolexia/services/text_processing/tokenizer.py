"""Tokenizer - word segmentation of chapter HTML with exact source offsets."""

import html as html_lib
from dataclasses import dataclass, field, replace
from typing import Iterator, List, Optional, Sequence, Set, Tuple

import regex

from xenolexia.core import Token

# Elements whose text is never prose, regardless of options.
NON_PROSE_TAGS = frozenset({"script", "style", "noscript", "svg", "math", "template"})

# Code-like elements, excluded when skip_code is enabled.
CODE_TAGS = frozenset({"code", "pre", "kbd", "samp", "var"})

ABBREVIATIONS = frozenset(
    {"etc", "eg", "ie", "vs", "mr", "mrs", "ms", "dr", "jr", "sr", "inc", "ltd", "co", "corp"}
)

NAME_PREFIXES = frozenset({"mr", "mrs", "ms", "dr", "prof", "sir", "lord", "lady"})

SENTENCE_TERMINATORS = frozenset(".!?…。！？")

# Opening quote -> closing quote. Closing-only marks are ignored when no quote is open.
QUOTE_PAIRS = {
    '"': '"',
    "“": "”",
    "'": "'",
    "‘": "’",
    "«": "»",
    "„": "“",
}
QUOTE_CHARS = frozenset(QUOTE_PAIRS) | frozenset(QUOTE_PAIRS.values())
APOSTROPHES = frozenset({"'", "’"})

# Block-level elements; an unterminated quote does not carry across them.
BLOCK_TAGS = frozenset(
    {"p", "div", "li", "ul", "ol", "blockquote", "section", "article", "br", "hr",
     "h1", "h2", "h3", "h4", "h5", "h6", "td", "th", "tr", "table", "body"}
)

_TAG_PATTERN = regex.compile(
    r"<!--.*?(?:-->|\Z)"
    r"|<!\[CDATA\[.*?(?:\]\]>|\Z)"
    r"|</?(?P<name>[A-Za-z][^\s/<>]*)(?:[^<>\"']|\"[^\"<]*\"|'[^'<]*')*>"
    r"|<[!?][^<>]*>",
    regex.DOTALL,
)
_ENTITY_PATTERN = regex.compile(r"&(?:#[0-9]+|#[xX][0-9A-Fa-f]+|[A-Za-z][A-Za-z0-9]*);")
_WORD_PATTERN = regex.compile(r"[\p{L}\p{M}\p{N}]+(?:['’][\p{L}\p{M}\p{N}]+)*")
_WORD_CHAR_PATTERN = regex.compile(r"[\p{L}\p{M}\p{N}]")

_TEXT = "text"
_MARKUP = "markup"


@dataclass
class TokenizerOptions:
    skip_quotes: bool = True
    """Protect words inside quotation marks"""
    skip_names: bool = True
    """Protect words that look like proper names"""
    skip_code: bool = True
    """Exclude the content of code-like elements entirely"""
    min_word_length: int = 2
    max_word_length: int = 30
    skip_words: Set[str] = field(default_factory=set)
    """Normalized words that are never emitted"""


class Tokenizer:
    """
    Splits chapter HTML into word tokens.

    Tag markup and the content of non-prose elements (script, style, ...) are
    boundary material: they never produce tokens, and tag attributes are never
    scanned for words. Each token records the gap text before and after it, so
    ``tokens[0].prefix + "".join(t.original + t.suffix for t in tokens)`` is the
    original input.
    """

    def __init__(self, options: Optional[TokenizerOptions] = None, **overrides):
        base = options or TokenizerOptions()
        self.options = replace(base, **overrides) if overrides else base

    def update_options(self, **changes) -> None:
        """Replace individual option values in place."""
        self.options = replace(self.options, **changes)

    def tokenize(self, html: str) -> List[Token]:
        """
        Tokenize chapter HTML.

        Args:
            html: Raw chapter markup. Malformed markup never raises; unrecognized
                material is treated as boundary text.

        Returns:
            Tokens in strictly increasing, non-overlapping source order.
        """
        if not isinstance(html, str) or not html:
            return []

        skip_tags = NON_PROSE_TAGS | CODE_TAGS if self.options.skip_code else NON_PROSE_TAGS
        min_len = max(1, int(self.options.min_word_length))
        max_len = max(min_len, int(self.options.max_word_length))
        skip_words = {w.lower() for w in self.options.skip_words}

        spans: List[Tuple[int, int, str, Optional[str]]] = []
        state = _ScanState()

        for kind, start, end in _split_regions(html, skip_tags):
            if kind == _MARKUP:
                if _is_block_boundary(html, start, end):
                    state.open_quote = None
                    state.sentence_start = True
                continue
            text, starts, ends = _decode_run(html, start, end)
            cursor = 0
            for match in _WORD_PATTERN.finditer(text):
                state.feed_boundary(text[cursor:match.start()])
                cursor = match.end()

                surface = match.group()
                normalized = surface.lower()
                previous_word = state.last_word
                state.last_word = normalized
                state.after_word = True

                if len(surface) < min_len or len(surface) > max_len or normalized in skip_words:
                    state.sentence_start = False
                    continue

                protection = self._protection_for(surface, normalized, previous_word, state)
                spans.append((starts[match.start()], ends[match.end() - 1], surface, protection))
                state.sentence_start = False
            state.feed_boundary(text[cursor:])

        return _build_tokens(html, spans)

    def _protection_for(
        self,
        original: str,
        normalized: str,
        previous_word: Optional[str],
        state: "_ScanState",
    ) -> Optional[str]:
        if normalized.replace("'", "").replace("’", "") in ABBREVIATIONS:
            return "name"
        if self.options.skip_names and self._looks_like_name(original, previous_word, state):
            return "name"
        if self.options.skip_quotes and state.open_quote is not None:
            return "quote"
        return None

    @staticmethod
    def _looks_like_name(original: str, previous_word: Optional[str], state: "_ScanState") -> bool:
        if not original[0].isupper():
            return False
        if previous_word in NAME_PREFIXES:
            return True
        if state.sentence_start:
            # Acronyms and mixed-case names are still names at sentence start.
            return any(ch.isupper() for ch in original[1:])
        return True

    @staticmethod
    def get_unique_words(tokens: Sequence[Token]) -> List[str]:
        """Distinct normalized words of unprotected tokens, in first-appearance order."""
        seen: Set[str] = set()
        unique: List[str] = []
        for token in tokens:
            if token.is_protected:
                continue
            word = token.word.lower()
            if word not in seen:
                seen.add(word)
                unique.append(word)
        return unique


def reconstruct(tokens: Sequence[Token]) -> str:
    """Rebuild the tokenized source from token bookkeeping alone."""
    if not tokens:
        return ""
    return tokens[0].prefix + "".join(token.original + token.suffix for token in tokens)


class _ScanState:
    """Running prose context between words (quotes, sentence boundaries)."""

    def __init__(self) -> None:
        self.sentence_start = True
        self.open_quote: Optional[str] = None
        self.last_word: Optional[str] = None
        self.after_word = False

    def feed_boundary(self, text: str) -> None:
        for ch in text:
            if ch in SENTENCE_TERMINATORS:
                self.sentence_start = True
            elif ch in QUOTE_CHARS:
                self._track_quote(ch)
            if not ch.isspace() and ch != ".":
                self.last_word = None
            self.after_word = _WORD_CHAR_PATTERN.match(ch) is not None

    def _track_quote(self, ch: str) -> None:
        if self.open_quote is not None:
            if QUOTE_PAIRS[self.open_quote] == ch:
                self.open_quote = None
            return
        if ch not in QUOTE_PAIRS:
            return
        if ch in APOSTROPHES and self.after_word:
            # Possessive apostrophe ("the dogs' bowls"), not an opening quote.
            return
        self.open_quote = ch


def _split_regions(html: str, skip_tags: frozenset) -> Iterator[Tuple[str, int, int]]:
    """
    Split html into text and markup regions.

    Markup covers tags, comments and whole non-prose
    elements (opening tag through matching closing tag, or end of input).
    """
    pos = 0
    length = len(html)
    while pos < length:
        match = _TAG_PATTERN.search(html, pos)
        if match is None:
            yield _TEXT, pos, length
            return
        if match.start() > pos:
            yield _TEXT, pos, match.start()

        name = (match.group("name") or "").lower()
        tag_text = match.group()
        end = match.end()
        if (
            name in skip_tags
            and not tag_text.startswith("</")
            and not tag_text.rstrip(">").rstrip().endswith("/")
        ):
            closing = regex.compile(r"</" + regex.escape(name) + r"\s*>", regex.IGNORECASE)
            close_match = closing.search(html, end)
            end = close_match.end() if close_match else length
        yield _MARKUP, match.start(), end
        pos = end


def _decode_run(html: str, start: int, end: int) -> Tuple[str, List[int], List[int]]:
    """
    Decode the character entities of a text region.

    Returns the decoded text plus, for every decoded character, the source
    span it came from. Characters produced by one entity share that entity's
    span, so a word spelled with entities ("r&eacute;sum&eacute;") maps back
    to its full source text. Unknown entities decode to a non-word character.
    """
    chars: List[str] = []
    starts: List[int] = []
    ends: List[int] = []
    cursor = start
    for match in _ENTITY_PATTERN.finditer(html, start, end):
        for pos in range(cursor, match.start()):
            chars.append(html[pos])
            starts.append(pos)
            ends.append(pos + 1)
        decoded = html_lib.unescape(match.group())
        if decoded == match.group():
            decoded = "\ufffd"
        for ch in decoded:
            chars.append(ch)
            starts.append(match.start())
            ends.append(match.end())
        cursor = match.end()
    for pos in range(cursor, end):
        chars.append(html[pos])
        starts.append(pos)
        ends.append(pos + 1)
    return "".join(chars), starts, ends


def _build_tokens(html: str, spans: List[Tuple[int, int, str, Optional[str]]]) -> List[Token]:
    tokens: List[Token] = []
    for idx, (start, end, surface, protection) in enumerate(spans):
        prev_end = spans[idx - 1][1] if idx > 0 else 0
        next_start = spans[idx + 1][0] if idx + 1 < len(spans) else len(html)
        original = html[start:end]
        tokens.append(
            Token(
                word=surface.lower(),
                original=original,
                start_index=start,
                end_index=end,
                prefix=html[prev_end:start],
                suffix=html[end:next_start],
                is_protected=protection is not None,
                protection_type=protection,
                surface=surface,
            )
        )
    return tokens


def _is_block_boundary(html: str, start: int, end: int) -> bool:
    match = _TAG_PATTERN.match(html, start, end)
    if match is None or not match.group("name"):
        return False
    return match.group("name").lower() in BLOCK_TAGS
