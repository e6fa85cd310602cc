"""Reset pipeline: key -> request -> sign."""

from collections.abc import Callable
from typing import Any

from .artifact_store import ArtifactStore
from .certificate_signer import CertificateSigner
from .crypto_engine import CryptoEngine
from .errors import UsageError
from .key_generator import KeyGenerator
from .logging_config import LOGGER
from .models import ResetResult, StageResult
from .request_builder import RequestBuilder


class Orchestrator:
    """Runs key generation, request building, and self-signing as one sequence."""

    def __init__(self, store: ArtifactStore, engine: CryptoEngine) -> None:
        """Initialize orchestrator and its three stage components.

        Args:
            store: Artifact store for the target directory
            engine: Crypto engine shared by all stages
        """
        self.store = store
        self.key_generator = KeyGenerator(store, engine)
        self.request_builder = RequestBuilder(store, engine)
        self.certificate_signer = CertificateSigner(store, engine)

    def stages(self, domain: str) -> list[tuple[str, Callable[[], Any]]]:
        """Return the ordered (name, callable) stages of a reset for domain."""
        return [
            ("key", self.key_generator.generate),
            ("request", lambda: self.request_builder.build(domain)),
            ("sign", self.certificate_signer.sign),
        ]

    def reset(self, domain: str) -> ResetResult:
        """Regenerate key, CSR, and self-signed certificate for domain.

        Stages run strictly in order. The first failing stage stops the
        pipeline and its exception is re-raised unchanged. Artifacts written
        by earlier stages are kept (no rollback).

        Args:
            domain: Non-empty domain name for the CSR and certificate

        Returns:
            ResetResult with the result of every stage

        Raises:
            UsageError: If domain is empty; checked before any stage runs
            TLSArtifactError: The error of the first failing stage
        """
        if not domain:
            raise UsageError("domain is required")

        LOGGER.info("Resetting TLS artifacts for %s in %s", domain, self.store.target_dir)

        completed: list[StageResult] = []
        for name, run in self.stages(domain):
            stage = _run_stage(name, run)
            completed.append(stage)
            if not stage.ok:
                LOGGER.error("Reset stopped at stage '%s': %s", name, stage.error)
                raise stage.error

        key, request, certificate = (stage.result for stage in completed)
        LOGGER.info("Reset complete: %s", self.store.state().value)
        return ResetResult(key=key, request=request, certificate=certificate, stages=completed)


def _run_stage(name: str, run: Callable[[], Any]) -> StageResult:
    """Run one stage and capture its outcome."""
    try:
        return StageResult(name=name, ok=True, result=run())
    except Exception as e:
        return StageResult(name=name, ok=False, error=e)
