#!/usr/bin/env python3
"""
Probe the static GET endpoints of a running web server.

Usage:
    python scripts/probe_endpoints.py [api_schema.json] [--base-url URL] [--timeout SECONDS]

Examples:
    # Probe against the default localhost:6678
    python scripts/probe_endpoints.py schemas/api_schema.json

    # Probe against a custom URL
    python scripts/probe_endpoints.py api_schema.json --base-url http://localhost:8080
"""

import sys
import os
import argparse

# Add src directory to path so the package imports without installing
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from devagent.core.endpoint_validator import EndpointValidator
from devagent.core.errors import SchemaDecodeFailed
from devagent.core.route_schema import decode_route_schema, filter_static_get_routes


def main():
    parser = argparse.ArgumentParser(description="Probe static GET endpoints of a running server")
    parser.add_argument("schema_file", help="Path to api_schema.json written by the agent")
    parser.add_argument("--base-url", "-u", default="http://localhost:6678",
                        help="Base URL of the web server (default: http://localhost:6678)")
    parser.add_argument("--timeout", "-t", type=float, default=5.0,
                        help="Per-request timeout in seconds (default: 5)")

    args = parser.parse_args()

    if not os.path.exists(args.schema_file):
        print(f"❌ File not found: {args.schema_file}")
        sys.exit(1)

    with open(args.schema_file, 'r') as f:
        raw_schema = f.read()

    try:
        routes = decode_route_schema(raw_schema)
    except SchemaDecodeFailed as e:
        print(f"❌ {e}")
        sys.exit(1)

    check_routes = filter_static_get_routes(routes)
    skipped = len(routes) - len(check_routes)

    print(f"🔍 Probing {len(check_routes)} static GET endpoint(s) against {args.base_url}")
    if skipped:
        print(f"   Skipping {skipped} dynamic or non-GET endpoint(s)")
    print(f"{'='*60}\n")

    validator = EndpointValidator(args.base_url, timeout=args.timeout, agent_position="Probe")
    results = validator.check_endpoints(check_routes)

    failed = [r for r in results if not r.ok]

    print(f"\n{'='*60}")
    print(f"RESULTS: {len(results) - len(failed)}/{len(results)} passed")
    print(f"{'='*60}")

    if failed:
        print(f"\n❌ Failed endpoints:")
        for r in failed:
            print(f"   - {r.route}: {r.error or f'status {r.status_code}'}")
        sys.exit(1)
    else:
        print(f"\n✅ All endpoints responded with 200!")
        sys.exit(0)


if __name__ == "__main__":
    main()
