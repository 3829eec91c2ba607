"""
Reindex Script

Rebuilds the phrase vector index from the lexicon (every dictionary term and
phrase of every category). Run it after changing the lexicon tables:

    intent-analyzer-reindex
    intent-analyzer-reindex --keep-existing
"""

import argparse
import asyncio
import sys

from intent_analyzer.core.config import get_settings
from intent_analyzer.core.exceptions import SimilarityServiceError
from intent_analyzer.modules.lexicon import get_default_lexicon
from intent_analyzer.modules.observability.logging_config import setup_logging
from intent_analyzer.modules.similarity.service import create_similarity_service


async def reindex(reset: bool = True) -> int:
    settings = get_settings()
    service = create_similarity_service(settings)
    lexicon = get_default_lexicon()

    print(f"[Reindex] Collection '{settings.COLLECTION_NAME}' in {settings.CHROMA_DIR}")
    print(f"[Reindex] Lexicon {lexicon.version}, model {settings.EMBEDDING_MODEL}")

    await service.index_lexicon(lexicon, reset=reset)
    info = await service.collection_info()
    print(f"[Reindex] Done: {info['point_count']} points indexed")
    return info["point_count"]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Rebuild the phrase vector index from the lexicon")
    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Do not clear the collection first (dynamic phrases are kept)",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args(argv)

    setup_logging(args.log_level.upper() if args.log_level else None)
    try:
        asyncio.run(reindex(reset=not args.keep_existing))
    except SimilarityServiceError as e:
        print(f"[Reindex] Failed: {e.message} {e.details}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
