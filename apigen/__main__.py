"""Entry point: python -m apigen

Reads settings from the environment (and .env), fetches the OpenAPI
document, and writes the TypeScript client into API_OUTPUT.
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import find_dotenv, load_dotenv

from .codegen import render
from .config import load_config
from .context_builder import build_context
from .emitter import emit
from .errors import GeneratorError
from .loader import load_document


def run() -> None:
    config = load_config()
    spec = load_document(config.source_url)
    context = build_context(spec)
    output = render(context)
    result = emit(output, config)

    print(
        f"Generated {config.output_dir} ({context['operation_count']} operations, "
        f"{len(context['models'])} models, {len(result.written)} files)"
    )


def main() -> None:
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(
        level=os.environ.get("API_LOG_LEVEL", "INFO").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        run()
    except GeneratorError as exc:
        sys.exit(f"apigen: {exc}")


if __name__ == "__main__":
    main()
