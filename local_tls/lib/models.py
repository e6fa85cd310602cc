"""Artifact kinds, lifecycle states and result models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


class ArtifactKind(Enum):
    """The three on-disk artifacts of one TLS identity."""

    KEY = "key"
    REQUEST = "request"
    CERTIFICATE = "certificate"


class ArtifactState(Enum):
    """Lifecycle state derived from which artifacts exist.

    INCONSISTENT covers combinations no operation produces, e.g. a CSR
    left behind after the key was deleted out of band.
    """

    EMPTY = "empty"
    KEY_ONLY = "key_only"
    KEY_AND_REQUEST = "key_and_request"
    FULL = "full"
    INCONSISTENT = "inconsistent"

    @classmethod
    def from_presence(cls, key: bool, request: bool, certificate: bool) -> "ArtifactState":
        """Map the (key, request, certificate) presence triple to a state."""
        states = {
            (False, False, False): cls.EMPTY,
            (True, False, False): cls.KEY_ONLY,
            (True, True, False): cls.KEY_AND_REQUEST,
            (True, True, True): cls.FULL,
        }
        return states.get((key, request, certificate), cls.INCONSISTENT)


@dataclass
class KeyResult:
    """Result from private key generation."""

    key_path: Path
    curve: str
    orphaned: list[ArtifactKind] = field(default_factory=list)


@dataclass
class RequestResult:
    """Result from CSR generation."""

    csr_path: Path
    common_name: str
    san_dns_names: list[str]


@dataclass
class CertificateResult:
    """Result from self-signing.

    Contains the certificate path, serial number and validity window.
    """

    cert_path: Path
    common_name: str
    serial_number: str
    not_valid_before: datetime
    not_valid_after: datetime


@dataclass
class StageResult:
    """Outcome of one stage of the reset pipeline."""

    name: str
    ok: bool
    result: Any = None
    error: Exception | None = None


@dataclass
class ResetResult:
    """Result from the reset pipeline (key -> request -> sign)."""

    key: KeyResult
    request: RequestResult
    certificate: CertificateResult
    stages: list[StageResult]
