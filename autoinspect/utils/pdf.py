"""Minimal PDF 1.4 writer for plain monospace text pages.

Each call to ``add_page`` produces exactly one output page. Lines are placed
top-down from a fixed origin with a fixed leading; nothing wraps or overflows
onto another page, so callers paginate before adding.

Object layout::

    1          catalog
    2          page tree
    3          Courier font (built-in, referenced by name only)
    4, 6, ...  page objects
    5, 7, ...  content streams

The writer keeps no state beyond the page list and performs no I/O, so the
same pages always render to the same bytes.
"""

PAGE_WIDTH = 595
PAGE_HEIGHT = 842
FONT_SIZE = 9
LEADING = 12
ORIGIN_X = 40
ORIGIN_Y = 800

FIRST_PAGE_OBJECT = 4


def escape_text(line: str) -> str:
    """Escape a line for use inside a PDF literal string.

    Backslash and parentheses are escaped; anything outside printable ASCII
    is replaced with ``?`` since no text encoding is declared.
    """
    out = []
    for ch in line:
        if ch in "\\()":
            out.append("\\" + ch)
        elif " " <= ch <= "~":
            out.append(ch)
        else:
            out.append("?")
    return "".join(out)


def build_text_stream(content: str) -> bytes:
    parts = [
        "BT",
        f"/F1 {FONT_SIZE} Tf",
        f"1 0 0 1 {ORIGIN_X} {ORIGIN_Y} Tm",
        f"{LEADING} TL",
    ]
    for line in content.split("\n"):
        parts.append(f"({escape_text(line)}) Tj T*")
    parts.append("ET")
    return "\n".join(parts).encode("ascii")


class PdfWriter:
    def __init__(self) -> None:
        self.pages: list[str] = []

    def add_page(self, text: str) -> None:
        self.pages.append(text)

    def render(self) -> bytes:
        buf = bytearray()
        offsets: list[int] = []

        def write_object(number: int, body: bytes) -> None:
            offsets.append(len(buf))
            buf.extend(f"{number} 0 obj\n".encode("ascii"))
            buf.extend(body)
            buf.extend(b"\nendobj\n")

        buf.extend(b"%PDF-1.4\n")

        write_object(1, b"<< /Type /Catalog /Pages 2 0 R >>")

        kids = " ".join(
            f"{FIRST_PAGE_OBJECT + i * 2} 0 R" for i in range(len(self.pages))
        )
        write_object(
            2,
            f"<< /Type /Pages /Kids [ {kids} ] /Count {len(self.pages)} >>".encode("ascii"),
        )

        write_object(3, b"<< /Type /Font /Subtype /Type1 /BaseFont /Courier >>")

        for i, page in enumerate(self.pages):
            page_obj = FIRST_PAGE_OBJECT + i * 2
            content_obj = page_obj + 1
            stream = build_text_stream(page)

            write_object(
                page_obj,
                (
                    f"<< /Type /Page /Parent 2 0 R "
                    f"/MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
                    f"/Contents {content_obj} 0 R "
                    f"/Resources << /Font << /F1 3 0 R >> >> >>"
                ).encode("ascii"),
            )
            write_object(
                content_obj,
                f"<< /Length {len(stream)} >>\nstream\n".encode("ascii")
                + stream
                + b"\nendstream",
            )

        xref_offset = len(buf)
        size = len(offsets) + 1  # entry 0 is the reserved free entry
        buf.extend(f"xref\n0 {size}\n".encode("ascii"))
        buf.extend(b"0000000000 65535 f \n")
        for offset in offsets:
            buf.extend(f"{offset:010d} 00000 n \n".encode("ascii"))

        buf.extend(
            f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n".encode("ascii")
        )
        return bytes(buf)
