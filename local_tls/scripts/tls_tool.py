#!/usr/bin/env python3
"""Issue a local EC key, CSR, and self-signed certificate into TARGET_DIR."""

import argparse
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from local_tls.lib.artifact_store import ArtifactStore
from local_tls.lib.certificate_signer import CertificateSigner
from local_tls.lib.config import TLSConfig
from local_tls.lib.crypto_engine import CryptoEngine, CryptographyEngine
from local_tls.lib.errors import (
    EngineFailure,
    MissingKeyError,
    MissingRequestError,
    UsageError,
)
from local_tls.lib.key_generator import KeyGenerator
from local_tls.lib.logging_config import LOGGER
from local_tls.lib.orchestrator import Orchestrator
from local_tls.lib.request_builder import RequestBuilder

USAGE_LINE = "local-tls [--target-dir PATH] <command> [domain]"

USAGE = f"""\
usage: {USAGE_LINE}

commands:
  key               generate (or overwrite) the private key tls.key
  request <domain>  generate (or overwrite) the CSR tls.csr for domain
  sign              self-sign tls.csr with tls.key into tls.crt
  reset <domain>    run key, request <domain>, and sign in one go

A domain starting with "-" may be given as-is or after "--", e.g. request -- -dev.local

Artifacts are read from and written to TARGET_DIR (default: current directory).
"""

DOMAIN_COMMANDS = ("request", "reset")


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser for the four subcommands."""
    parser = _ArgumentParser(prog="local-tls", usage=USAGE_LINE)
    parser.add_argument(
        "--target-dir",
        type=Path,
        default=None,
        help="Directory holding tls.key, tls.csr, tls.crt (default: $TARGET_DIR or cwd)",
    )
    subparsers = parser.add_subparsers(dest="command", prog="local-tls")

    subparsers.add_parser("key", help="Generate or overwrite the private key")
    request = subparsers.add_parser("request", help="Generate or overwrite the CSR")
    request.add_argument("domain", nargs="?", default=None, help="Domain for CN and SAN")
    subparsers.add_parser("sign", help="Self-sign the CSR with the private key")
    reset = subparsers.add_parser("reset", help="Run key, request, and sign")
    reset.add_argument("domain", nargs="?", default=None, help="Domain for CN and SAN")

    return parser


def run_command(
    command: str,
    domain: str | None,
    store: ArtifactStore,
    engine: CryptoEngine,
) -> None:
    """Dispatch one subcommand against the store.

    Raises:
        TLSArtifactError: Whatever the invoked operation raises
    """
    if command == "key":
        result = KeyGenerator(store, engine).generate()
        LOGGER.info("Key: %s", result.key_path)
    elif command == "request":
        result = RequestBuilder(store, engine).build(domain or "")
        LOGGER.info("CSR: %s", result.csr_path)
    elif command == "sign":
        result = CertificateSigner(store, engine).sign()
        LOGGER.info("Cert: %s", result.cert_path)
        LOGGER.info("Serial: %s", result.serial_number)
    elif command == "reset":
        result = Orchestrator(store, engine).reset(domain or "")
        LOGGER.info("Key: %s", result.key.key_path)
        LOGGER.info("CSR: %s", result.request.csr_path)
        LOGGER.info("Cert: %s", result.certificate.cert_path)
    else:
        raise UsageError(f"unknown command: {command}")


def main(
    argv: list[str] | None = None,
    environ: Mapping[str, str] | None = None,
    engine: CryptoEngine | None = None,
) -> int:
    """Run the local TLS tool.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])
        environ: Environment mapping for TARGET_DIR (default: os.environ)
        engine: Crypto engine (default: CryptographyEngine)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = build_parser()

    try:
        args, extras = parser.parse_known_args(argv)
        # A leading "-" makes argparse treat the domain as an unknown option
        if args.command in DOMAIN_COMMANDS and args.domain is None and len(extras) == 1:
            args.domain = extras.pop()
        if extras:
            raise UsageError(f"unrecognized arguments: {' '.join(extras)}")
        if args.command is None:
            raise UsageError("a command is required")
        if args.command in DOMAIN_COMMANDS and not args.domain:
            raise UsageError(f"{args.command} requires a domain")
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr, end="")
        return 1

    config = TLSConfig.from_environ(os.environ if environ is None else environ)
    if args.target_dir is not None:
        config.target_dir = args.target_dir

    store = ArtifactStore(config)

    try:
        domain = args.domain if args.command in DOMAIN_COMMANDS else None
        run_command(args.command, domain, store, engine or CryptographyEngine())
        return 0

    except MissingKeyError as e:
        LOGGER.error("Private key missing: %s", e)
        return 1
    except MissingRequestError as e:
        LOGGER.error("Certificate signing request missing: %s", e)
        return 1
    except EngineFailure as e:
        LOGGER.error("Crypto engine failure: %s", e)
        return 1
    except Exception as e:
        LOGGER.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
