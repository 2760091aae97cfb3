"""
Configuration management for MCP server settings and command-line arguments.
"""

import argparse
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Transport(str, Enum):
    STDIO = "stdio"
    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"


class Config(BaseSettings):
    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    host: str = Field("0.0.0.0", alias="MCP_HOST", description="Host to bind")
    port: int = Field(8000, alias="MCP_PORT", description="Port to listen on")
    transport: Transport = Field(
        Transport.STREAMABLE_HTTP,
        description=f"Transport protocol, allowed: {[t.value for t in Transport]}"
    )
    log_level: str = Field('INFO', description="Logging level",
                           examples=["CRITICAL", "FATAL", "ERROR", "WARNING", "INFO", "DEBUG"])
    results_path: str = Field("eval_results_array.json", alias="BENCHMARK_RESULTS_PATH",
                              description="Evaluation results document loaded once per session")
    export_dir: str = Field("exports", alias="BENCHMARK_EXPORT_DIR",
                            description="Directory export files are written to")

    @field_validator("transport")
    def reject_sse(cls, v):
        if v == Transport.SSE:
            raise ValueError("SSE transport not supported")
        return v


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments and environment variables into Config."""
    parser = argparse.ArgumentParser(description="Benchmark Center MCP Server")

    # Transport options
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http"],
        help="Transport protocol to use",
    )

    # HTTP transport configuration
    parser.add_argument(
        "--host",
        help="Host to bind to for HTTP transports (default: 0.0.0.0, env: MCP_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on for HTTP transports",
    )

    # Data locations
    parser.add_argument(
        "--results-path",
        help="Evaluation results JSON file (env: BENCHMARK_RESULTS_PATH)",
    )

    parser.add_argument(
        "--export-dir",
        help="Directory for exported files (env: BENCHMARK_EXPORT_DIR)",
    )

    # Optional log level
    parser.add_argument(
        "--log-level",
        help="Logging level",
    )

    args = parser.parse_args(argv)

    return args


def get_config(argv: Optional[List[str]] = None) -> Config:
    args = parse_args(argv)
    # Only include CLI values that are actually set
    cli_overrides = {k: v for k, v in vars(args).items() if v is not None}
    return Config(**cli_overrides)
