#!/usr/bin/env python3
"""
CLI for devagent - generate, build and test a backend web server
"""

import os
import sys
import argparse
from dotenv import load_dotenv

from .core.config import AgentConfig
from .core.errors import AgentError
from .core.factsheet import FactSheet
from .core.llm_client import LLMClient
from .agents.backend_developer_agent import BackendDeveloperAgent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Turn a project description into a working backend web server"
    )
    parser.add_argument(
        "description",
        nargs="?",
        help="Natural-language project description (or use --factsheet)"
    )
    parser.add_argument(
        "--factsheet",
        "-f",
        help="Path to a fact sheet JSON file with the project description",
        default=None
    )
    parser.add_argument(
        "--factsheet-out",
        help="Write the final fact sheet (code + endpoint schema) to this JSON file",
        default=None
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to a YAML config file (paths, commands, port, timings)",
        default=None
    )
    parser.add_argument(
        "--project-dir",
        help="Web server project directory the build and run commands execute in",
        default=None
    )
    parser.add_argument(
        "--template",
        help="Code template the first draft is based on",
        default=None
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Source file the generated code is written to",
        default=None
    )
    parser.add_argument(
        "--schema",
        help="JSON file the extracted endpoint schema is written to",
        default=None
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="Port the generated web server listens on",
        default=None
    )
    return parser


def load_config(args: argparse.Namespace) -> AgentConfig:
    """Config file first, command line flags win"""
    config = AgentConfig.from_yaml(args.config) if args.config else AgentConfig()

    overrides = {
        "project_dir": args.project_dir,
        "template_path": args.template,
        "output_path": args.output,
        "schema_path": args.schema,
        "port": args.port,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)
    return config


def main(argv=None):
    """Main CLI entry point"""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.description and not args.factsheet:
        print("❌ Error: provide a project description or --factsheet")
        sys.exit(1)

    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key:
        print("❌ Error: ANTHROPIC_API_KEY environment variable not set")
        sys.exit(1)

    try:
        config = load_config(args)
        if args.factsheet:
            factsheet = FactSheet.load(args.factsheet)
        else:
            factsheet = FactSheet(project_description=args.description)
    except (AgentError, OSError, ValueError, KeyError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    print(f"\n{'='*70}")
    print(f"⚡ BACKEND DEVELOPMENT")
    print(f"{'='*70}\n")
    print(f"📁 Project directory: {config.project_dir}")
    print(f"📝 Output file: {config.output_path}")
    print(f"🔌 Web server port: {config.port}\n")

    llm = LLMClient(api_key=api_key, max_tokens=8192)
    agent = BackendDeveloperAgent(llm, config)

    try:
        agent.execute(factsheet)
    except AgentError as e:
        print(f"\n❌ {e}")
        sys.exit(1)
    finally:
        if args.factsheet_out:
            factsheet.save(args.factsheet_out)
            print(f"📋 Saved fact sheet to {args.factsheet_out}")

    failed = [r for r in agent.probe_results if not r.ok]

    print(f"\n{'='*70}")
    print(f"🎉 BACKEND COMPLETE!")
    print(f"{'='*70}\n")
    print(f"📂 Code written to: {config.output_path}")
    print(f"📋 Endpoint schema: {config.schema_path}")
    print(f"🔍 Endpoints probed: {len(agent.probe_results)}, failed: {len(failed)}")
    for result in failed:
        reason = result.error or f"status {result.status_code}"
        print(f"   - {result.route}: {reason}")
    print()


if __name__ == "__main__":
    main()
