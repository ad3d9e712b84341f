"""Template lexer and pattern compiler.

Grammar (informal EBNF):
    template   := (literal | parameter)*
    literal    := any run of characters outside parentheses
    parameter  := '(' token ')'
    token      := key_path | keyword+
    keyword    := identifier? ':'

Unbalanced delimiters are recovered from deterministically unless the
compiler runs in strict mode:
    - an unterminated '(' makes the rest of the template the last token
    - a stray ')' outside a parameter is literal text
    - a '(' inside a parameter is part of the token
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from sockit.errors import ClassificationError, CompileError
from sockit.models import PatternMode, Segment, SockitConfig
from sockit.pattern import Pattern

logger = logging.getLogger(__name__)


class TokenType(Enum):
    LITERAL = auto()     # static text
    PARAMETER = auto()   # (token)
    EOF = auto()


@dataclass
class Token:
    type: TokenType
    text: str
    position: int


class Lexer:
    """Splits a template into literal and parameter tokens."""

    def __init__(self, template: str, strict: bool = False) -> None:
        self.template = template
        self.strict = strict

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        text = self.template
        literal: list[str] = []
        literal_start = 0
        i = 0
        while i < len(text):
            char = text[i]

            if char == "(":
                if literal:
                    tokens.append(Token(TokenType.LITERAL, "".join(literal), literal_start))
                    literal = []
                end = self._find_close(i)
                tokens.append(Token(TokenType.PARAMETER, text[i + 1:end], i))
                i = end + 1
                literal_start = i
                continue

            if char == ")" and self.strict:
                raise CompileError(
                    f"Unmatched ')' at position {i} in '{text}'", text
                )

            literal.append(char)
            i += 1

        if literal:
            tokens.append(Token(TokenType.LITERAL, "".join(literal), literal_start))
        tokens.append(Token(TokenType.EOF, "", len(text)))
        return tokens

    def _find_close(self, start: int) -> int:
        """Return the index of the ')' closing the parameter opened at start."""
        text = self.template
        end = text.find(")", start + 1)
        if end == -1:
            if self.strict:
                raise CompileError(
                    f"Unterminated parameter opened at position {start} in '{text}'",
                    text,
                )
            logger.warning(
                "Unterminated parameter at position %d in %r; "
                "treating the remainder as its token", start, text,
            )
            return len(text)
        if self.strict:
            nested = text.find("(", start + 1, end)
            if nested != -1:
                raise CompileError(
                    f"Nested '(' at position {nested} in '{text}'", text
                )
        return end


class Compiler:
    """Turns a token stream into an immutable Pattern."""

    def __init__(
        self, tokens: list[Token], template: str, config: SockitConfig | None = None
    ) -> None:
        self.tokens = tokens
        self.template = template
        self.config = config or SockitConfig()

    def compile(self) -> Pattern:
        segments = tuple(
            Segment.parameter(t.text) if t.type == TokenType.PARAMETER else Segment.literal(t.text)
            for t in self.tokens
            if t.type != TokenType.EOF
        )
        parameters = [s.text for s in segments if s.is_parameter]
        mode = self._classify(parameters)

        if mode is PatternMode.OUTBOUND:
            pattern = Pattern(
                template=self.template,
                segments=segments,
                mode=mode,
                operation_name="".join(parameters),
                argument_marker=self.config.argument_marker,
                construction_prefix=self.config.construction_prefix,
            )
        else:
            pattern = Pattern(
                template=self.template,
                segments=segments,
                mode=mode,
                key_paths=tuple(parameters),
                argument_marker=self.config.argument_marker,
                construction_prefix=self.config.construction_prefix,
            )
        logger.debug(
            "Compiled %r: %s pattern with %d parameter(s)",
            self.template, mode.value, len(parameters),
        )
        return pattern

    def _classify(self, parameters: list[str]) -> PatternMode:
        marker = self.config.argument_marker
        keywords = [p for p in parameters if p.endswith(marker)]
        key_paths = [p for p in parameters if not p.endswith(marker)]

        if keywords and key_paths:
            raise ClassificationError(self.template, keywords, key_paths)
        if keywords:
            return PatternMode.OUTBOUND
        return PatternMode.INBOUND


def compile_pattern(template: str, config: SockitConfig | None = None) -> Pattern:
    """Compile a template string into a Pattern."""
    config = config or SockitConfig()
    lexer = Lexer(template, strict=config.strict_delimiters)
    tokens = lexer.tokenize()
    compiler = Compiler(tokens, template, config)
    return compiler.compile()
