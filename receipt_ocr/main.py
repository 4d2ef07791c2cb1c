import argparse
import json
import sys
from pathlib import Path

from receipt_ocr.config.settings import Settings
from receipt_ocr.logging.logger import Log
from receipt_ocr.parsing.locales import LOCALES
from receipt_ocr.pipeline.controller import build_controller
from receipt_ocr.pipeline.state import Step
from receipt_ocr.upload.models import UploadedFile


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="receipt-ocr",
        description="Extract a candidate transaction from a receipt or statement.",
    )
    parser.add_argument("path", type=Path, help="PDF or image file to process")
    parser.add_argument("--mime-type", help="override the media type guessed from the extension")
    parser.add_argument(
        "--locale", choices=sorted(LOCALES), help="parsing and category locale"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build controller -> run one attempt -> print state."""
    args = _parse_args(argv)
    settings = Settings()
    if args.locale:
        settings = settings.model_copy(update={"locale": args.locale})
    Log.configure(settings.log_level)

    try:
        upload = UploadedFile.from_path(args.path, mime_type=args.mime_type)
    except OSError as exc:
        Log.error(f"Cannot read {args.path}: {exc}")
        return 2

    controller = build_controller(settings)
    state = controller.select_file(upload)
    print(json.dumps(state.to_dict(), indent=2, ensure_ascii=False))
    return 0 if state.step is Step.PREVIEW else 1


if __name__ == "__main__":
    sys.exit(main())
