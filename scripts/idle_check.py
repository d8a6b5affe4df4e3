#!/usr/bin/env python3
"""
Run one idle-monitor tick and exit. For schedulers that start a container or
process per tick (cron, EventBridge scheduled tasks) instead of calling
POST /internal/idle-check.

Usage: python scripts/idle_check.py
Always exits 0: an abstained or failed tick waits for the next schedule.
"""
from datetime import timedelta

from tts_endpoint.core.config import get_settings
from tts_endpoint.core.logging import configure_logging
from tts_endpoint.core.telemetry import init_telemetry
from tts_endpoint.services.endpoint_controller import EndpointController
from tts_endpoint.services.idle_monitor import IdleMonitor
from tts_endpoint.services.provider_factory import get_endpoint_provider, get_log_provider


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    init_telemetry(console_export=settings.otel_console_export)

    controller = EndpointController(
        provider=get_endpoint_provider(),
        endpoint_name=settings.endpoint_name,
        endpoint_config_name=settings.endpoint_config_name,
    )
    monitor = IdleMonitor(
        log_provider=get_log_provider(),
        controller=controller,
        log_group=settings.log_group_name,
        idle_window=timedelta(minutes=settings.idle_window_minutes),
    )
    result = monitor.tick()
    print(result.decision.value)


if __name__ == "__main__":
    main()
