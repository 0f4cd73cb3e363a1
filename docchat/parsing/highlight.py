"""Line-range highlighting for document previews.

Answers cite a document-wide line range (``From``/``To``, 1-based). The
extracted text of a PDF does not carry layout, so the range is mapped to
pages by counting extracted lines, and the highlight on each page is placed
proportionally: a line's vertical position is its index over the number of
lines on that page. This is approximate; headers, columns and figures all
shift real line positions.
"""

from docchat.models.schemas import HighlightRegion, PreviewLine


def normalize_range(start: int | None, end: int | None, total: int) -> tuple[int, int] | None:
    """Clamp a 1-based inclusive line range to ``1..total``.

    Returns:
        The clamped (start, end), or None if there is nothing to highlight.
    """
    if start is None or end is None or total <= 0:
        return None
    if start > end:
        start, end = end, start
    if end < 1:
        return None
    start = max(start, 1)
    end = min(end, total)
    if start > end:
        return None
    return start, end


def locate_line_range(
    page_lines: list[list[str]],
    start: int | None,
    end: int | None,
) -> list[HighlightRegion]:
    """Map a document-wide line range to highlight regions, one per page.

    Args:
        page_lines: Extracted lines of each page.
        start: First line of the range (1-based).
        end: Last line of the range (1-based, inclusive).

    Returns:
        Regions in page order; empty when the range is missing or outside
        the document.
    """
    total = sum(len(lines) for lines in page_lines)
    bounds = normalize_range(start, end, total)
    if bounds is None:
        return []
    start, end = bounds

    regions: list[HighlightRegion] = []
    offset = 0
    for page_number, lines in enumerate(page_lines, start=1):
        count = len(lines)
        first = max(start, offset + 1)
        last = min(end, offset + count)
        if count and first <= last:
            first_local = first - offset
            last_local = last - offset
            regions.append(
                HighlightRegion(
                    page=page_number,
                    first_line=first_local,
                    last_line=last_local,
                    top=round((first_local - 1) / count, 4),
                    height=round((last_local - first_local + 1) / count, 4),
                )
            )
        offset += count
        if offset >= end:
            break
    return regions


def number_lines(
    page_lines: list[list[str]],
    start: int | None,
    end: int | None,
) -> list[PreviewLine]:
    """Number every line and flag the ones inside the range."""
    total = sum(len(lines) for lines in page_lines)
    bounds = normalize_range(start, end, total)

    numbered: list[PreviewLine] = []
    number = 0
    for page_number, lines in enumerate(page_lines, start=1):
        for text in lines:
            number += 1
            highlighted = bounds is not None and bounds[0] <= number <= bounds[1]
            numbered.append(
                PreviewLine(number=number, page=page_number, text=text, highlighted=highlighted)
            )
    return numbered


def excerpt(
    page_lines: list[list[str]],
    start: int | None,
    end: int | None,
    context: int = 3,
) -> list[PreviewLine]:
    """The highlighted lines plus ``context`` lines on either side."""
    numbered = number_lines(page_lines, start, end)
    marked = [line.number for line in numbered if line.highlighted]
    if not marked:
        return []
    lo = max(marked[0] - context, 1)
    hi = marked[-1] + context
    return [line for line in numbered if lo <= line.number <= hi]
