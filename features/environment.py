"""
Behave environment configuration for DNS Zone Manager integration tests.
"""

import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.test_zone = "example-com"
    context.test_dns = "example.com."

    context.test_config = {
        "dns_providers": {
            "mock": {
                "page_size": 100,
                "zones": [{"name": context.test_zone, "dnsName": context.test_dns}],
            }
        },
        "default_provider": "mock",
        "retry": {"max_retries": 3, "base_delay": 0, "jitter": False},
        "logging": {"level": "DEBUG"},
    }

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.scenario_name = scenario.name
    context.change = None
    context.error = None

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    if context.error is not None:
        logger.info(f"Scenario {scenario.name} ended with error: {context.error}")

    logger.info(f"Completed scenario: {scenario.name}")
