"""
Contract Deployer - Main Entry Point
Deploys the configured contract once and records the result
"""

import sys
from loguru import logger

from deployer.config import load_config
from deployer.exceptions import DeploymentError
from deployer.pipeline import run_deployment
from deployer.reporting import report_failure, report_success


def configure_logging(log_file: str = "logs/deploy.log"):
    """Console sink for progress, file sink for full detail"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="INFO"
    )
    logger.add(
        log_file,
        rotation="1 day",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level="DEBUG"
    )


def main() -> int:
    """
    Run one deployment

    Returns:
        Process exit code: 0 on success, 1 on any fatal failure
    """
    logger.info("=" * 70)
    logger.info("🚀 Contract Deployment")
    logger.info("=" * 70)

    try:
        config = load_config()
    except DeploymentError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    outcome = run_deployment(config)

    if outcome.succeeded:
        report_success(outcome, config.network.explorer_url)
    else:
        report_failure(outcome)

    return outcome.exit_code


def cli():
    """Console script entry point"""
    configure_logging()
    try:
        code = main()
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        code = 1
    except Exception as e:
        logger.opt(exception=e).error(f"Fatal error: {e}")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    cli()
