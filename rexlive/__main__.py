from __future__ import annotations

import argparse


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="rexlive",
        description="rexlive: live regular expression tester",
    )
    parser.add_argument(
        "session",
        nargs="?",
        help="Name of a session to load and save (omit for a scratch session)",
    )
    parser.add_argument("--config", help="Path to config file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    from rexlive.app import RexLiveApp
    from rexlive.session.persist import SessionError

    try:
        app = RexLiveApp(
            session_name=args.session, config_path=args.config, verbose=args.verbose
        )
    except SessionError as exc:
        parser.exit(1, f"rexlive: {exc}\n")
    app.run()


if __name__ == "__main__":
    main()
