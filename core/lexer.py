"""
Logo lexer for tokenizing raw turtle program text.
"""
import re
from dataclasses import dataclass
from typing import List


@dataclass
class Token:
    """Represents a single token in a Logo program."""
    value: str
    line_number: int
    char_start: int
    char_end: int

    def upper(self) -> str:
        return self.value.upper()

    def __str__(self):
        return self.value


class LogoLexer:
    """Tokenizes Logo text into a flat list of tokens."""

    # Brackets and commas are always tokens of their own
    TOKEN_PATTERN = re.compile(r'[\[\],]|[^\s\[\],]+')

    def tokenize(self, source: str) -> List[Token]:
        """Tokenize the entire program. Never fails; blank input gives []."""
        tokens = []
        for line_num, line in enumerate(source.split('\n'), 1):
            tokens.extend(self._tokenize_line(line, line_num))
        return tokens

    def tokenize_values(self, source: str) -> List[str]:
        """Tokenize and return just the token strings."""
        return [token.value for token in self.tokenize(source)]

    def _tokenize_line(self, line: str, line_number: int) -> List[Token]:
        """Tokenize a single line, dropping any ';' comment."""
        comment_pos = line.find(';')
        if comment_pos >= 0:
            line = line[:comment_pos]

        return [Token(match.group(0), line_number, match.start(), match.end())
                for match in self.TOKEN_PATTERN.finditer(line)]
