import argparse
import sys
from pathlib import Path

from docquery.config.settings import Settings
from docquery.logging.logger import Log
from docquery.pipeline.exceptions import PipelineError
from docquery.pipeline.service import build_service


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docquery",
        description="Ask a question, optionally grounded in the text of a PDF.",
    )
    parser.add_argument("question", help="question to ask")
    parser.add_argument("--pdf", type=Path, help="PDF whose text grounds the answer")
    parser.add_argument("--model", help="answering model (defaults to the configured one)")
    args = parser.parse_args(argv)
    if args.pdf is not None and not args.pdf.is_file():
        parser.error(f"PDF file not found: {args.pdf}")
    return args


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build service -> extract -> ask."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    service = build_service(settings)

    try:
        context = None
        if args.pdf is not None:
            context = service.extract(
                args.pdf.read_bytes(),
                filename=args.pdf.name,
                content_type="application/pdf",
            )
        result = service.ask(args.question, context=context, model=args.model)
    except PipelineError as exc:
        Log.error(f"Query failed ({exc.kind}): {exc}")
        print(f"{exc.kind}: {exc}", file=sys.stderr)
        return 1
    finally:
        service.close()

    print(result.answer)
    for number, source in enumerate(result.sources, start=1):
        print(f"[{number}] {source}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
