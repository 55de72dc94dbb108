# SPDX-License-Identifier: MIT

from . import VERSION, config, logger, set_verbose
from .animations import animations
from .batch import DownloadJob, run_batch
from .config import ConfigError, DiscordConfig, SlackConfig
from .emoji import DatasetError, load_catalog, load_kitchen
from .identifiers import AnimatedFilename
from .manifest import write_manifest
from .preview import render_ansi
from .request import RequestError
from .upload import (
    DiscordUploader,
    SlackUploader,
    UploadJob,
    animated_uploads,
    list_files,
    pair_uploads,
)
from .utils import colors

import argparse
import sys
import time
from pathlib import Path

parser = argparse.ArgumentParser(
    prog="emojikitchen",
    description="Download Emoji Kitchen combinations and Noto animated emoji",
)
parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
parser.add_argument(
    "--emoji-data",
    default=config.EMOJI_DATA_PATH,
    help="path to the emoji-data emoji.json file (default: %(default)s)",
)
parser.add_argument(
    "--pairs",
    default=config.PAIRS_PATH,
    help="path to the Emoji Kitchen pairs.txt file (default: %(default)s)",
)
parser.add_argument("-v", "--verbose", action="store_true", help="print debug output")

subparsers = parser.add_subparsers(dest="command", metavar="command")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


def _add_name(subparser):
    subparser.add_argument("-n", "--name", help="only include emoji with this short name")


def _add_jobs(subparser):
    subparser.add_argument(
        "-j",
        "--jobs",
        type=positive_int,
        default=config.CONCURRENCY,
        help="number of downloads to run at once (default: %(default)s)",
    )


def cmd_download(args) -> int:
    pairs = load_kitchen(args.emoji_data, args.pairs, args.name)
    logger.info(f"{len(pairs)} pairs found")

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    jobs = [
        DownloadJob(
            description=f"{pair.filename} {pair.image_url}",
            url=pair.image_url,
            target=output_dir / pair.filename,
        )
        for pair in pairs
    ]
    run_batch(jobs, args.jobs)
    return 0


def cmd_animations(args) -> int:
    animations(args.output, args.name, args.size, args.jobs)
    return 0


def cmd_json(args) -> int:
    start = time.monotonic()
    pairs = load_kitchen(args.emoji_data, args.pairs, args.name)
    write_manifest(pairs, args.output)
    logger.info(f"Wrote {len(pairs)} pairs to {args.output}")
    logger.debug(f"Took {time.monotonic() - start:.2f}s")
    return 0


def cmd_show(args) -> int:
    pairs = load_kitchen(args.emoji_data, args.pairs, args.name)

    if args.count:
        print(len(pairs))
        return 0

    input_dir = Path(args.input)
    for pair in pairs:
        print(pair.name)
        if args.preview:
            try:
                print(render_ansi(input_dir / pair.filename))
            except (OSError, ValueError) as e:
                logger.debug(f"No preview for {pair.filename}: {e}")

    return 0


def cmd_show_animated(args) -> int:
    catalog = load_catalog(args.emoji_data)

    emoji_list = []
    for path in list_files(args.input):
        try:
            filename = AnimatedFilename.parse(path.name)
        except ValueError:
            continue

        emoji = catalog.get(filename.catalog_codepoint)
        if emoji is None:
            continue

        emoji_list.append((emoji.sort_order, f":{emoji.short_name}_animated: "))

    emoji_list.sort(key=lambda e: e[0])
    print("".join(name for _, name in emoji_list))
    return 0


def cmd_upload(args) -> int:
    uploader = SlackUploader(SlackConfig.from_env())
    catalog = load_catalog(args.emoji_data)

    emoji_list = animated_uploads(args.input, catalog, args.name)
    logger.info(f"ℹ️ {len(emoji_list)} emoji found")

    run_batch([UploadJob(uploader, emoji) for emoji in emoji_list], concurrency=1)
    return 0


def cmd_discord(args) -> int:
    uploader = DiscordUploader(DiscordConfig.from_env())

    emoji_list = pair_uploads(args.input, args.name)
    logger.info(f"ℹ️ {len(emoji_list)} emoji found")

    try:
        existing = uploader.list_emoji()
    except RequestError as e:
        logger.error(f"Failed to fetch existing emoji: {e}")
        return 1

    to_upload = []
    for emoji in emoji_list:
        if emoji.name in existing:
            logger.info(f"{emoji.name} already uploaded, skipping")
        else:
            to_upload.append(emoji)

    run_batch([UploadJob(uploader, emoji) for emoji in to_upload], concurrency=1)
    return 0


p = subparsers.add_parser("download", help="download Emoji Kitchen images")
_add_name(p)
p.add_argument("-o", "--output", default="dist", help="output directory (default: %(default)s)")
_add_jobs(p)
p.set_defaults(func=cmd_download)

p = subparsers.add_parser("animations", help="download and resize Noto animated emoji")
_add_name(p)
p.add_argument("-o", "--output", required=True, help="output directory")
p.add_argument(
    "-s", "--size", type=positive_int, required=True, help="width and height in pixels"
)
_add_jobs(p)
p.set_defaults(func=cmd_animations)

p = subparsers.add_parser("json", help="write a JSON manifest of Emoji Kitchen pairs")
_add_name(p)
p.add_argument("-o", "--output", required=True, help="path of the JSON file to write")
p.set_defaults(func=cmd_json)

p = subparsers.add_parser("show", help="list Emoji Kitchen pairs")
p.add_argument("-c", "--count", action="store_true", help="only print the number of pairs")
p.add_argument("-i", "--input", required=True, help="directory with downloaded images")
_add_name(p)
p.add_argument("-p", "--preview", action="store_true", help="preview images in the terminal")
p.set_defaults(func=cmd_show)

p = subparsers.add_parser("show-animated", help="list downloaded animations as shortcodes")
p.add_argument("-i", "--input", required=True, help="directory with downloaded animations")
p.set_defaults(func=cmd_show_animated)

p = subparsers.add_parser("upload", help="upload downloaded animations to Slack")
p.add_argument("-i", "--input", required=True, help="directory with downloaded animations")
_add_name(p)
p.set_defaults(func=cmd_upload)

p = subparsers.add_parser("discord", help="upload downloaded Emoji Kitchen images to Discord")
p.add_argument("-i", "--input", required=True, help="directory with downloaded images")
_add_name(p)
p.set_defaults(func=cmd_discord)


def main(argv=None) -> int:
    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    if not args.command:
        parser.print_help()
        return 1

    logger.debug(f"{colors['bold']}emojikitchen{colors['reset']} {VERSION}")

    try:
        return args.func(args)
    except (DatasetError, ConfigError, OSError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
