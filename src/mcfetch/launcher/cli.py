from __future__ import annotations

import argparse
import logging
from pathlib import Path

from mcfetch import __version__ as MCFETCH_VERSION
from mcfetch.common.config import GamePaths, RuntimeConfig
from mcfetch.common.errors import LaunchError, McFetchError
from mcfetch.common.logging_utils import configure_logging
from mcfetch.launcher.download_service import DownloadProgress
from mcfetch.launcher.install_service import InstallRequest, InstallService
from mcfetch.launcher.process_service import ProcessService


log = logging.getLogger(__name__)

FULL_LAUNCH_HINT = (
    "The client jar alone cannot start the game. A real launcher must build the full classpath "
    "(libraries), extract natives and pass arguments like --username, --version, --gameDir, "
    "--assetsDir and --accessToken."
)
NEXT_STEPS_HINT = "Next steps: assemble libraries, extract natives and implement Microsoft/Xbox OAuth for online play."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"mcfetch {MCFETCH_VERSION}: download a Minecraft client jar")
    parser.add_argument(
        "-version",
        "--version",
        dest="version",
        default="",
        help="Version id to install (e.g. 1.20.2). If empty, uses the latest release.",
    )
    parser.add_argument(
        "-run-offline",
        "--run-offline",
        dest="run_offline",
        action="store_true",
        help="After download, attempt to run the client jar (offline test).",
    )
    parser.add_argument(
        "-mcdir",
        "--mcdir",
        dest="mcdir",
        default=None,
        help="Game directory (default: $HOME/.minecraft).",
    )
    parser.add_argument("-username", "--username", dest="username", default="Player", help="Offline username.")
    parser.add_argument("--check-only", action="store_true", help="Resolve the version and exit without downloading.")
    parser.add_argument("--no-verify", action="store_true", help="Skip size/SHA-1 verification of the download.")
    parser.add_argument("--log-level", default="INFO", help="Log level.")
    parser.add_argument("--log-dir", default=None, help="Also write mcfetch.log to this directory.")
    return parser


def _log_progress(progress: DownloadProgress) -> None:
    if progress.phase in {"download-start", "download-progress"}:
        log.debug("%s", progress.message)
    else:
        log.info("%s", progress.message)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, log_dir=Path(args.log_dir) if args.log_dir else None)

    try:
        runtime = RuntimeConfig.from_env()
        game_dir = Path(args.mcdir) if args.mcdir else GamePaths.default().game_dir
        request = InstallRequest(
            version=args.version,
            game_dir=game_dir,
            run_offline=args.run_offline,
            username=args.username,
            check_only=args.check_only,
            verify=not args.no_verify,
        )
        log.debug("Username %r is accepted but not used.", request.username)

        result = InstallService(runtime).install(request, progress_callback=_log_progress)

        if request.run_offline and not request.check_only:
            log.info("Attempting to run the jar offline (minimal test). Java must be installed and on PATH.")
            try:
                ProcessService(runtime).run_client(result.jar_path)
            except LaunchError as exc:
                log.error("Java failed: %s", exc)
                log.error("%s", FULL_LAUNCH_HINT)
                return 1
    except McFetchError as exc:
        log.debug("Run aborted.", exc_info=True)
        log.error("%s", exc)
        return 1

    log.info("Done. Version %s installed to %s", result.version_id, result.jar_path.parent)
    log.info("%s", NEXT_STEPS_HINT)
    return 0
