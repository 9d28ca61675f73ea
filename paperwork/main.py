import argparse
import asyncio
from collections.abc import Sequence

from paperwork.ai.factory import ChatClientFactory
from paperwork.config.settings import Settings
from paperwork.database.connection import close_pool, init_pool
from paperwork.logging.logger import Log
from paperwork.processor.categorization_runner import build_categorization_runner
from paperwork.processor.locks import DocumentLocks
from paperwork.processor.processor import build_processor
from paperwork.worker.queue import BackgroundQueue


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paperwork-worker",
        description="Process and categorize uploaded documents.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    process = commands.add_parser("process", help="run full processing for documents")
    process.add_argument("document_ids", nargs="+")

    categorize = commands.add_parser("categorize", help="queue categorization for documents")
    categorize.add_argument("document_ids", nargs="+")

    pending = commands.add_parser(
        "categorize-pending", help="categorize PENDING documents of a workspace"
    )
    pending.add_argument("workspace_id")
    pending.add_argument("--limit", type=int, default=None)
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Initialize pool -> build dependencies -> run the command. Returns exit code."""
    await init_pool(settings)
    try:
        client = ChatClientFactory.create(settings)
        locks = DocumentLocks()
        processor = build_processor(settings, client=client, locks=locks)
        runner = build_categorization_runner(settings, client=client, locks=locks)

        if args.command == "categorize-pending":
            items = await runner.categorize_pending(args.workspace_id, args.limit)
            for item in items:
                Log.info(f"{item.id}: {'ok' if item.ok else f'failed ({item.error})'}")
            return 0 if all(item.ok for item in items) else 1

        queue = BackgroundQueue(processor, runner)
        for document_id in args.document_ids:
            if args.command == "process":
                queue.enqueue_document_processing(document_id)
            else:
                queue.enqueue_categorization(document_id)
        await queue.join()
        return 0
    finally:
        await close_pool()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse arguments, configure logging, run the command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    raise SystemExit(main())
