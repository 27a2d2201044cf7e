"""Basic unfurl example: preview a single URL in-process."""

from unfurler import unfurl

result = unfurl("https://github.com/encode/httpx")

if result.is_empty():
    print(f"Nothing found for {result.url}")
else:
    print(f"=== {result.title} ===")
    print(result.description)
    print()
    print(f"Canonical: {result.canonical_url}")
    print(f"Type:      {result.type.value}")
    if result.image:
        print(f"Image:     {result.image.url} ({result.image.width}x{result.image.height})")
    if result.video:
        print(f"Video:     {result.video.url}")
