import logging
import sys

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)

# Matcher scoring is logged at DEBUG; client libraries stay at INFO
for noisy in ("pymongo", "slack_bolt", "slack_sdk", "urllib3"):
    logging.getLogger(noisy).setLevel(logging.INFO)

logger = logging.getLogger("faqbot")
