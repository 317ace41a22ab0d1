#!/usr/bin/env python3
"""Launch the SAVIO Trend Studio web interface."""

import argparse
import sys

from savio.exceptions import StartupConfigError
from savio.web.app import launch_app


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Launch SAVIO Trend Studio web interface"
    )

    parser.add_argument(
        '--share',
        action='store_true',
        help='Create a public share link (requires internet)'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=7860,
        help='Port to run the server on (default: 7860)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args()

    print("""
    🎬 SAVIO Trend Studio - Web Interface
    =====================================

    Starting web server...
    """)

    if args.share:
        print("📡 Creating public share link...")
    else:
        print(f"🌐 Local URL: http://localhost:{args.port}")

    print("\nPress Ctrl+C to stop the server\n")

    try:
        launch_app(
            share=args.share,
            port=args.port,
            log_level="DEBUG" if args.debug else None
        )
    except StartupConfigError as e:
        print(f"\n❌ {e.message}")
        print("Set GEMINI_API_KEY in your environment or .env file.")
        return 2
    except KeyboardInterrupt:
        print("\n\nServer stopped by user.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
