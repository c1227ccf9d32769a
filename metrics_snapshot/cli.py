import argparse
import logging
from typing import Callable, List, Optional

from metrics_snapshot.config import DEFAULT_ENV_FILE, Settings, get_settings
from metrics_snapshot.errors import ConfigurationError, SamplingError
from metrics_snapshot.models.metrics import SystemMetrics
from metrics_snapshot.services import mailer, report_writer, sampler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

EXIT_OK = 0
EXIT_SAMPLING_FAILED = 1
EXIT_CONFIGURATION_ERROR = 2


def run(
    settings: Settings,
    sample: Optional[Callable[[], SystemMetrics]] = None,
) -> int:
    """
    Sample the host once, write the CSV report and mail it if SMTP is set up.

    Only a sampling failure changes the exit code. Writing and mailing are
    best-effort: their failures are logged and the run still exits with 0.
    """
    sample = sample or sampler.sample

    try:
        metrics = sample()
    except SamplingError as exc:
        logger.error("Error getting system metrics: %s", exc)
        return EXIT_SAMPLING_FAILED
    logger.info("Metrics: %s", metrics)

    destination = report_writer.report_path(settings.reports_dir)
    written = report_writer.write_report(metrics, destination)

    if not settings.mail_enabled:
        logger.info("SMTP_HOST not set, skipping email")
    elif not written:
        logger.warning("No report written, skipping email")
    else:
        logger.info("Sending metrics to email")
        mailer.send_report(settings, destination)

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="metrics-snapshot",
        description="Sample CPU, memory and disk usage once, save it as CSV and optionally email it.",
    )
    parser.add_argument(
        "--env-file",
        default=DEFAULT_ENV_FILE,
        help="dotenv file with SMTP settings (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        settings = get_settings(args.env_file)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIGURATION_ERROR

    logging.getLogger().setLevel(settings.log_level)
    return run(settings)


if __name__ == "__main__":
    raise SystemExit(main())
