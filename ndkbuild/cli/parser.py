"""
ndkbuild command-line interface.

This module implements the command-line front-end using argparse:

    ndkbuild [options] [ABI...]
"""

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence

from ndkbuild.backends.cmake import CMakeBackend
from ndkbuild.build.driver import BuildDriver
from ndkbuild.cli.utils import (
    check_prerequisites,
    format_success_message,
    load_yaml_config,
    print_error,
)
from ndkbuild.config.settings import (
    BUILD_TYPES,
    CONFIG_FILE_NAME,
    DEFAULT_API_LEVEL,
    DEFAULT_BUILD_TYPE,
    resolve_configuration,
)
from ndkbuild.core.exceptions import NdkBuildError
from ndkbuild.core.interfaces import ExternalProcess, FileSystem
from ndkbuild.core.locking import BuildLockManager
from ndkbuild.cross.targets import (
    ABI_DESCRIPTIONS,
    DEFAULT_ABI,
    SUPPORTED_ABIS,
    is_supported_abi,
)
from ndkbuild.toolchain.locator import NdkLocator

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("ndkbuild")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

EPILOG = """\
ABIs:
{abis}

Examples:
    ndkbuild arm64-v8a                    # Build for ARM64
    ndkbuild --all                        # Build for all ABIs
    ndkbuild -t Debug arm64-v8a x86_64    # Debug build for ARM64 and x86_64
    ndkbuild -n /path/to/ndk arm64-v8a    # Specify NDK path

Environment Variables:
    ANDROID_NDK             Path to Android NDK
    NDK_PATH                Alternative path to Android NDK
    ANDROID_SDK_ROOT        Path to Android SDK (NDK looked up in ndk-bundle/ or ndk/)
    ANDROID_HOME            Alternative path to Android SDK
    BUILD_TYPE              Build type [default: Release]
    ANDROID_PLATFORM        Android API level [default: 24]
    BUILD_DIR_PREFIX        Build directory prefix [default: build-android]

Files:
    <prefix>-<ABI>/         Build directory per ABI, created in the project root
    .ndkbuild/              Lock files that keep concurrent runs out of the
                            same build directory
"""


def _abi_argument(value: str) -> str:
    if not is_supported_abi(value):
        raise argparse.ArgumentTypeError(
            f"unknown ABI '{value}' (choose from {', '.join(SUPPORTED_ABIS)})"
        )
    return value


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {number}")
    return number


def select_abis(abis: Sequence[str], build_all: bool = False) -> List[str]:
    """
    Decide which ABIs to build.

    --all selects every supported ABI and overrides any listed ABIs.
    Otherwise listed ABIs are used in order with duplicates dropped, and
    with none listed the default ABI is built.

    Example:
        >>> select_abis(["x86", "x86", "arm64-v8a"])
        ['x86', 'arm64-v8a']
    """
    if build_all:
        if abis:
            logger.warning(
                f"--all given; ignoring explicitly listed ABIs: {', '.join(abis)}"
            )
        return list(SUPPORTED_ABIS)
    if not abis:
        return [DEFAULT_ABI]
    return list(dict.fromkeys(abis))


class CLI:
    """ndkbuild command-line interface."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        fs: Optional[FileSystem] = None,
        process: Optional[ExternalProcess] = None,
        which: Callable[[str], Optional[str]] = shutil.which,
        lock_manager: Optional[BuildLockManager] = None,
        host_os: Optional[str] = None,
    ):
        """
        Initialize CLI with argument parser.

        The collaborators default to the real environment, filesystem and
        subprocesses; tests pass doubles.
        """
        self.environ = os.environ if environ is None else environ
        self.fs = fs
        self.process = process
        self.which = which
        self.lock_manager = lock_manager or BuildLockManager()
        self.host_os = host_os
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        abis = "\n".join(
            f"    {abi:<24}{ABI_DESCRIPTIONS[abi]}" for abi in SUPPORTED_ABIS
        )
        parser = argparse.ArgumentParser(
            prog="ndkbuild",
            description="Build the project for Android using the NDK.",
            epilog=EPILOG.format(abis=abis),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "--version", action="version", version=f"ndkbuild {__version__}"
        )
        parser.add_argument(
            "-t",
            "--type",
            dest="build_type",
            choices=BUILD_TYPES,
            metavar="TYPE",
            help=f"Build type ({', '.join(BUILD_TYPES)}) [default: {DEFAULT_BUILD_TYPE}]",
        )
        parser.add_argument(
            "-p",
            "--platform",
            dest="api_level",
            type=_positive_int,
            metavar="LEVEL",
            help=f"Android API level [default: {DEFAULT_API_LEVEL}]",
        )
        parser.add_argument(
            "-n",
            "--ndk",
            type=str,
            metavar="PATH",
            help="Path to Android NDK (or set ANDROID_NDK / NDK_PATH env)",
        )
        parser.add_argument(
            "-c",
            "--clean",
            action="store_true",
            help="Clean build directory before building",
        )
        parser.add_argument(
            "-j",
            "--jobs",
            type=_positive_int,
            metavar="N",
            help="Number of parallel build jobs [default: auto]",
        )
        parser.add_argument(
            "--all",
            dest="build_all",
            action="store_true",
            help="Build for all supported ABIs",
        )
        parser.add_argument(
            "-G",
            "--generator",
            metavar="NAME",
            help="CMake generator [default: Ninja]",
        )
        parser.add_argument(
            "--build-dir-prefix",
            metavar="PREFIX",
            help="Build directories are named PREFIX-ABI [default: build-android]",
        )
        parser.add_argument(
            "--cmake-arg",
            dest="cmake_args",
            action="append",
            default=[],
            metavar="ARG",
            help="Additional CMake configure argument (can be used multiple times)",
        )
        parser.add_argument(
            "--keep-going",
            action="store_true",
            help="Keep building remaining ABIs after a failure",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help=f"Path to configuration file (default: ./{CONFIG_FILE_NAME})",
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "abis",
            nargs="*",
            type=_abi_argument,
            metavar="ABI",
            help="Android ABI to build [default: arm64-v8a]",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Options and ABIs may be intermixed. Invalid input prints usage and
        exits with status 2.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_intermixed_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        try:
            return self._build(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except NdkBuildError as e:
            print_error(str(e), e.hint)
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1
        except Exception as e:
            print_error(f"Unexpected error: {e}", "Re-run with --verbose for details")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _build(self, args) -> int:
        """
        Resolve configuration and NDK, check tools, then build every ABI.

        Raises:
            NdkBuildError: On any configuration, toolchain or build failure
        """
        project_root = Path(args.project_root).resolve()

        if args.config:
            file_config = load_yaml_config(args.config, required=True)
        else:
            file_config = load_yaml_config(project_root / CONFIG_FILE_NAME)

        config = resolve_configuration(
            project_root=project_root,
            build_type=args.build_type,
            api_level=args.api_level,
            ndk_path=Path(args.ndk) if args.ndk else None,
            clean=args.clean,
            jobs=args.jobs,
            build_dir_prefix=args.build_dir_prefix,
            generator=args.generator,
            cmake_args=args.cmake_args,
            keep_going=args.keep_going,
            environ=self.environ,
            file_config=file_config,
        )
        abis = select_abis(args.abis, args.build_all)

        locator = NdkLocator(environ=self.environ, fs=self.fs, host_os=self.host_os)
        ndk_path = locator.locate(config.ndk_path)
        logger.info(f"Using NDK: {ndk_path}")
        config = config.with_ndk(ndk_path)

        backend = CMakeBackend(self.process)
        check_prerequisites(backend.required_tools(config), self.which)

        driver = BuildDriver(
            config, backend=backend, fs=self.fs, lock_manager=self.lock_manager
        )
        jobs = driver.build_all(abis)

        print(
            format_success_message(
                "All builds completed successfully!",
                {
                    "NDK": ndk_path,
                    "Build type": config.build_type,
                    "Android platform": config.api_level,
                },
                [f"{config.build_dir_prefix}-{job.abi}/" for job in jobs],
            )
        )
        return 0


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
