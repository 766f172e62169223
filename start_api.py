#!/usr/bin/env python3
"""
Sentinel Grid API Server Start Script

Builds the refresh pipeline from environment configuration, starts the
background refresh loop and serves the API with uvicorn.
"""

import os

if __name__ == "__main__":
    import uvicorn
    from dotenv import load_dotenv

    from sentinel.api.app import create_app
    from sentinel.config import load_config
    from sentinel.pipeline import GridRefreshPipeline
    from sentinel.telemetry import OpenMeteoWeatherProvider
    from sentinel.utils import configure_logging

    load_dotenv()
    configure_logging()

    config = load_config()
    weather = None
    if os.getenv("SENTINEL_LIVE_WEATHER", "false").lower() == "true":
        weather = OpenMeteoWeatherProvider()

    pipeline = GridRefreshPipeline(config, weather_provider=weather)
    pipeline.tick()
    pipeline.start()

    app = create_app(pipeline, config.api)

    print(f"Starting Sentinel Grid API on http://{config.api.host}:{config.api.port}")
    try:
        uvicorn.run(app, host=config.api.host, port=config.api.port)
    finally:
        pipeline.stop()
