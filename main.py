#!/usr/bin/env python3
import asyncio, signal, sys, logging
from config.logging_config import configure
from config.app_config import Settings
from garagething.core.exceptions import GarageThingError
from garagething.services import DeviceService

async def async_main():
    settings = Settings.from_env()
    configure(settings.LOG_LEVEL)
    service = DeviceService(settings.validate())
    await service.startup()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, service.request_stop)
    try:
        await service.run()
    finally:
        await service.shutdown()

def main():
    try:
        asyncio.run(async_main())
    except GarageThingError as e:
        logging.getLogger("main").critical(f"fatal: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit("🌙  graceful shutdown")

if __name__ == "__main__":
    main()
