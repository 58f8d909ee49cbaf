from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .config import StudioConfig
from .credentials import EnvKeySelector
from .errors import MissingCredentials
from .studio import ApplicationState, GenerationStatus

STATUS_LABELS = {
    GenerationStatus.GENERATING_SCRIPT: "Writing script...",
    GenerationStatus.GENERATING_VIDEO: "Dreaming video (Veo)...",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a Human vs. Bigfoot podcast script and Veo clip from a reference image."
    )
    parser.add_argument("image", type=Path, help="Reference image for the scene")
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional path to studio configuration JSON/YAML",
    )
    parser.add_argument(
        "--mime-type",
        help="Media type of the image; guessed from the file name when omitted",
    )
    parser.add_argument(
        "--script-only",
        action="store_true",
        help="Stop after the script and skip video generation",
    )
    parser.add_argument(
        "--format",
        choices=("json", "text"),
        default="json",
        help="How to print the final state",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def render_state(state: ApplicationState, fmt: str) -> str:
    if fmt == "json":
        payload = state.model_dump(mode="json", by_alias=True)
        return json.dumps(payload, indent=2)
    parts = [f"Status: {state.status.value}"]
    if state.script is not None:
        parts.append(state.script.as_text())
    if state.video_url:
        parts.append(f"Video: {state.video_url}")
    if state.error:
        parts.append(f"Error: {state.error}")
    return "\n\n".join(parts)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = StudioConfig.from_file(args.config) if args.config else StudioConfig()
    if args.script_only:
        config = config.model_copy(update={"include_video": False})

    selector = EnvKeySelector(config.api_key_env)
    if not selector.has_selected_api_key() and not config.api_key_parameter and sys.stdin.isatty():
        selector.open_select_key()
    try:
        api_key = config.resolve_api_key()
    except MissingCredentials as exc:
        print(str(exc), file=sys.stderr)
        return 2

    def _report(state: ApplicationState) -> None:
        label = STATUS_LABELS.get(state.status)
        if label:
            print(label, file=sys.stderr)

    studio = config.build_studio(api_key=api_key, on_change=_report)
    studio.select_image(args.image, args.mime_type)
    state = studio.generate()

    print(render_state(state, args.format))
    return 1 if state.status == GenerationStatus.ERROR else 0


if __name__ == "__main__":
    sys.exit(main())
