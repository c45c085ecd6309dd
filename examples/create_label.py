#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os
import sys
from urllib.parse import quote

from laakhay.github import (
    NotFound,
    RequestSpec,
    RestRunner,
    ValidationFailure,
    configure,
)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Create a label unless it already exists")
    p.add_argument("repo", help="owner/name")
    p.add_argument("name")
    p.add_argument("--color", default="ededed")
    return p.parse_args()


async def main() -> int:
    args = parse_args()
    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        print("GITHUB_TOKEN is required to create labels")
        return 2
    configure(access_token=token)

    async with RestRunner() as runner:
        label_path = f"/repos/{args.repo}/labels/{quote(args.name, safe='')}"
        probe = await runner.invoke_result(
            RequestSpec(label_path, description="Checking label"),
            no_status=True,
        )
        exists = probe.map(lambda _: True).recover(NotFound, False).unwrap()
        if exists:
            print(f"Label '{args.name}' already exists in {args.repo}")
            return 0

        try:
            label = await runner.request(
                f"/repos/{args.repo}/labels",
                method="POST",
                body={"name": args.name, "color": args.color},
                description="Creating label",
                telemetry_event_name="labels.create",
                no_status=True,
            )
        except ValidationFailure as e:
            for error in e.errors:
                print(f"  {error.get('field')}: {error.get('code')}")
            return 1

    print(f"Created label '{label['name']}' ({label['url']})")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
