"""Responsive image references derived from an image base name.

The optimized asset pipeline writes every image once per codec and width
under a fixed naming convention. URLs are built by string formatting only;
the assets themselves are never inspected.
"""

from dataclasses import dataclass

ASSET_PATH_TEMPLATE = "assets/optimized/images/{base}"

# Widest first: emitted in this order in srcset strings
WIDTHS = (1600, 1200, 800, 400)

PRIMARY_CODEC = "avif"
FALLBACK_CODEC = "webp"
FALLBACK_WIDTH = 800


@dataclass(frozen=True)
class ImageReference:
    """All URLs derived from one image base name."""

    base_name: str
    avif: tuple[tuple[int, str], ...]
    webp: tuple[tuple[int, str], ...]
    fallback: str

    def srcset(self, codec: str) -> str:
        """Build a responsive source-set attribute value.

        Args:
            codec: "avif" or "webp"

        Returns:
            Comma-separated "url widthw" entries, widest first

        Raises:
            ValueError: If codec is not supported
        """
        if codec == PRIMARY_CODEC:
            entries = self.avif
        elif codec == FALLBACK_CODEC:
            entries = self.webp
        else:
            raise ValueError(f"Unsupported image codec: {codec}")
        return ", ".join(f"{url} {width}w" for width, url in entries)

    def urls(self) -> list[str]:
        """Every codec/width URL, primary codec first."""
        return [url for _, url in self.avif] + [url for _, url in self.webp]


def expand(base_name: str | None) -> ImageReference | None:
    """Expand an image base name into its responsive URLs.

    Args:
        base_name: Logical image identifier (e.g., "kitchen-1")

    Returns:
        ImageReference, or None for a missing or empty base name
    """
    if not base_name:
        return None

    base_path = ASSET_PATH_TEMPLATE.format(base=base_name)
    return ImageReference(
        base_name=base_name,
        avif=_entries(base_path, PRIMARY_CODEC),
        webp=_entries(base_path, FALLBACK_CODEC),
        fallback=f"{base_path}-{FALLBACK_WIDTH}.{FALLBACK_CODEC}",
    )


def _entries(base_path: str, codec: str) -> tuple[tuple[int, str], ...]:
    return tuple((width, f"{base_path}-{width}.{codec}") for width in WIDTHS)
