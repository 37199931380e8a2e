"""Parse Markdown text into block tokens with line spans."""

from loguru import logger
from markdown_it import MarkdownIt
from markdown_it.token import Token

from markdown_worklogs.models.document import Block, BlockKind, DocumentSnapshot

_md = MarkdownIt("commonmark")


def split_lines(text: str) -> list[str]:
    """Split text into lines, keeping line breaks.

    A trailing newline does not start an extra empty line, matching the line
    numbering of the block parser.
    """
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _fence_is_closed(token: Token, start: int, stop: int) -> bool:
    # An unterminated fence swallows every line after its opener as content,
    # so a closing marker exists iff one spanned line is left unaccounted for.
    interior = len(token.content.splitlines())
    return (stop - start - 1) - interior == 1


def _fence_language(info: str) -> str:
    words = info.strip().split(maxsplit=1)
    return words[0] if words else ""


def _to_block(token: Token) -> Block | None:
    if token.map is None:
        logger.debug("Skipping {} token without a line span", token.type)
        return None

    start, stop = token.map
    span = (start, max(start, stop - 1))

    if token.type == "heading_open" and token.markup.startswith("#"):
        return Block(
            kind=BlockKind.HEADING,
            line_span=span,
            nesting_depth=token.level,
            tag_level=int(token.tag[1:]),
        )
    if token.type == "fence":
        return Block(
            kind=BlockKind.FENCE,
            line_span=span,
            nesting_depth=token.level,
            content=token.content,
            language=_fence_language(token.info),
            closed=_fence_is_closed(token, start, stop),
        )
    return Block(kind=BlockKind.OTHER, line_span=span, nesting_depth=token.level)


def parse_blocks(text: str) -> tuple[Block, ...]:
    """Parse a document snapshot into its block sequence, in document order.

    Only opening and self-contained block tokens are reported. Headings nested
    in a container (list item, blockquote) keep a non-zero ``nesting_depth``;
    ``#`` lines inside a fenced block are fence content and never headings.
    """
    blocks: list[Block] = []
    for token in _md.parse(text):
        if not token.block or token.nesting < 0 or token.type == "inline":
            continue
        block = _to_block(token)
        if block is not None:
            blocks.append(block)
    return tuple(blocks)


def take_snapshot(text: str) -> DocumentSnapshot:
    """Re-derive lines and blocks from scratch; nothing is cached across edits."""
    return DocumentSnapshot(text=text, lines=tuple(split_lines(text)), blocks=parse_blocks(text))
