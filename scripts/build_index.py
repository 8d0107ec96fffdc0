import logging

from config import FLAGS
from rhyme_core.index_builder import build_artifacts
from rhyme_core.logging_utils import setup_logging

setup_logging()
log = logging.getLogger(__name__)

if __name__ == "__main__":
    ctx = build_artifacts(FLAGS["CMUDICT_PATH"], FLAGS["ARTIFACTS_DIR"])
    log.info("Built %s from %s (%d words)", FLAGS["ARTIFACTS_DIR"], FLAGS["CMUDICT_PATH"], len(ctx))
