#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from laakhay.github import EngineConfig, RestRunner, configure
from laakhay.github.runtime.background import BackgroundRunner, ProgressUpdate


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List the open issues of a repository")
    p.add_argument("repo", nargs="?", default="octocat/Hello-World")
    p.add_argument("--per-page", type=int, default=100)
    p.add_argument("--max-pages", type=int, default=10)
    p.add_argument("--host", default=None, help="GitHub Enterprise hostname")
    return p.parse_args()


def show_progress(update: ProgressUpdate) -> None:
    print(f"  ... {update.description} ({update.elapsed_s:.0f}s)")


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.WARNING)

    overrides = {"max_pages": args.max_pages}
    config = (
        EngineConfig.for_enterprise(args.host, **overrides)
        if args.host
        else EngineConfig(**overrides)
    )
    configure(access_token=os.environ.get("GITHUB_TOKEN"), config=config)

    background = BackgroundRunner.with_progress(
        interval=config.progress_interval, reporter=show_progress
    )
    async with RestRunner(background=background) as runner:
        result = await runner.request(
            f"/repos/{args.repo}/issues?state=open&per_page={args.per_page}",
            expect_multiple_pages=True,
            extended_result=True,
            description=f"Listing issues of {args.repo}",
        )
        core = runner.rate_limit.snapshot("core")

    print("=" * 65)
    print(f"Repository : {args.repo}")
    print(f"Issues     : {len(result.body)}")
    print(f"Pages      : {result.pages}")
    if core is not None:
        print(f"Rate limit : {core.remaining}/{core.limit} (resets {core.reset_at})")
    print("=" * 65)
    for issue in result.body:
        kind = "PR" if "pull_request" in issue else "  "
        print(f"#{issue['number']:<6} {kind} {issue['title'][:52]}")
    print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
