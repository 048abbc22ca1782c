"""Source location tracking for error messages and debugging.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location of a token or error position.

    Line and column are 1-indexed; offsets are absolute positions in the
    input buffer (code units, so bytes for the narrow tokenizer).

    Attributes:
        lineno: Line number as tracked by the tokenizer (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute start offset in source buffer
        end_offset: Absolute end offset in source buffer
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(lineno=1, col_offset=1)
            >>> str(loc)
            '1:1'

            >>> loc = SourceLocation(3, 7, 20, 24, "calc.txt")
            >>> str(loc)
            'calc.txt:3:7'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.txt:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def at(
        cls,
        source: str | bytes,
        offset: int,
        lineno: int,
        end_offset: int | None = None,
        source_file: str | None = None,
    ) -> SourceLocation:
        """Build a location for ``offset`` in ``source``.

        The column is measured from the last ``\\n`` before ``offset``. The
        line number is passed in rather than recounted, since the tokenizer
        counts newline tokens, not newline characters.
        """
        newline = b"\n" if isinstance(source, bytes) else "\n"
        line_start = source.rfind(newline, 0, offset) + 1
        return cls(
            lineno=lineno,
            col_offset=offset - line_start + 1,
            offset=offset,
            end_offset=offset if end_offset is None else end_offset,
            source_file=source_file,
        )
