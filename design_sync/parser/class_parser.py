"""Utility-class parser.

Converts a class string such as ``"bg-kumo-brand text-white px-3 h-9
rounded-lg hover:bg-kumo-brand/70"`` into a ``ParsedStyle``. Tokens are
scanned left to right; a later token overrides an earlier one for the same
field. Unknown or unresolvable tokens are dropped and reported as
``ParseWarning`` records, never as exceptions.
"""

from dataclasses import dataclass, field

from ..errors import ParseWarning
from ..sync_logging import LogCategory, get_category_logger
from ..theme.snapshot import ThemeSnapshot
from .config import ParserConfig
from .handlers import UtilityHandlers
from .style import ParsedStyle
from .tokenizer import ClassToken, tokenize

logger = get_category_logger(LogCategory.PARSER)


@dataclass
class ParseResult:
    """A parsed style plus the tokens that were dropped."""

    style: ParsedStyle
    warnings: list[ParseWarning] = field(default_factory=list)


class ClassParser:
    """Parses utility-class strings against one theme snapshot."""

    def __init__(self, snapshot: ThemeSnapshot, config: ParserConfig | None = None):
        self.snapshot = snapshot
        self.config = config or ParserConfig()
        self.handlers = UtilityHandlers(snapshot, self.config)

    def parse(self, class_string: str) -> ParsedStyle:
        """Parse a class string. Never raises."""
        return self.parse_with_warnings(class_string).style

    def parse_with_warnings(self, class_string: str) -> ParseResult:
        """Parse a class string and collect warnings for dropped tokens."""
        result = ParseResult(style=ParsedStyle())
        if not isinstance(class_string, str):
            result.warnings.append(ParseWarning(repr(class_string), "not a string"))
            return result

        for token in tokenize(class_string):
            reason = self._apply(result.style, token)
            if reason is not None:
                warning = ParseWarning(token.raw, reason)
                result.warnings.append(warning)
                logger.debug(f"Dropped class token {warning}")
        return result

    def parse_many(self, *class_strings: str | None) -> ParsedStyle:
        """Parse several class strings as if joined in order."""
        return self.parse(" ".join(s for s in class_strings if s))

    def _apply(self, style: ParsedStyle, token: ClassToken) -> str | None:
        if token.malformed:
            return "malformed token"
        if not token.variants:
            return self.handlers.dispatch(style, token)
        if len(token.variants) > 1:
            return f"stacked variants {':'.join(token.variants)} not supported"
        variant = token.variants[0]
        if variant not in self.config.state_variants:
            return f"variant {variant!r} skipped"
        state_style = style.states.get(variant) or ParsedStyle()
        reason = self.handlers.dispatch(state_style, token)
        if reason is None:
            style.states[variant] = state_style
        return reason


def parse(class_string: str, snapshot: ThemeSnapshot, config: ParserConfig | None = None) -> ParsedStyle:
    """Parse one class string with a throwaway parser."""
    return ClassParser(snapshot, config).parse(class_string)
