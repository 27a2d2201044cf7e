"""Unfurl a list of URLs from a CSV file and write the previews as JSON lines."""

import asyncio
import csv
import json
import sys

from unfurler.services.fetcher import build_async_client
from unfurler.services.unfurl import unfurl_async

# Read URLs from a CSV file (one URL per line, or first column)
csv_path = sys.argv[1] if len(sys.argv) > 1 else "urls.csv"

urls = []
try:
    with open(csv_path) as f:
        reader = csv.reader(f)
        for row in reader:
            if row and row[0].strip().startswith("http"):
                urls.append(row[0].strip())
except FileNotFoundError:
    print(f"File not found: {csv_path}")
    print("Usage: python batch_unfurl.py [urls.csv]")
    print("CSV format: one URL per line (or URL in first column)")
    sys.exit(1)

print(f"Loaded {len(urls)} URLs from {csv_path}", file=sys.stderr)


async def run():
    async with build_async_client() as client:
        return await asyncio.gather(*(unfurl_async(url, client=client) for url in urls))


results = asyncio.run(run())

with open("previews.jsonl", "w") as f:
    for unfurled in results:
        f.write(json.dumps(unfurled.model_dump(mode="json", by_alias=True)) + "\n")

empty = sum(r.is_empty() for r in results)
print(f"Wrote {len(results)} previews to previews.jsonl ({empty} empty)", file=sys.stderr)
