"""Tests for the reset pipeline."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from local_tls.lib.artifact_store import ArtifactStore
from local_tls.lib.cert_utils import (
    deserialize_certificate,
    deserialize_csr,
    deserialize_private_key,
    get_common_name,
    get_san_dns_names,
    public_key_matches,
)
from local_tls.lib.certificate_signer import CertificateSigner
from local_tls.lib.config import TLSConfig
from local_tls.lib.crypto_engine import CryptographyEngine
from local_tls.lib.errors import EngineFailure, UsageError
from local_tls.lib.key_generator import KeyGenerator
from local_tls.lib.models import ArtifactKind, ArtifactState
from local_tls.lib.orchestrator import Orchestrator
from local_tls.lib.request_builder import RequestBuilder


class TestReset:
    """Tests for Orchestrator.reset()."""

    @pytest.mark.parametrize(
        "existing",
        [
            [],
            [ArtifactKind.KEY],
            [ArtifactKind.KEY, ArtifactKind.REQUEST],
            [ArtifactKind.KEY, ArtifactKind.REQUEST, ArtifactKind.CERTIFICATE],
            [ArtifactKind.REQUEST],
        ],
    )
    def test_reset_from_any_state_ends_full(
        self,
        store: ArtifactStore,
        engine: CryptographyEngine,
        existing: list[ArtifactKind],
    ) -> None:
        """reset() reaches FULL regardless of the starting state."""
        for kind in existing:
            store.path(kind).write_bytes(b"placeholder")

        Orchestrator(store, engine).reset("b.com")

        assert store.state() is ArtifactState.FULL

    def test_reset_artifacts_are_consistent(
        self, store: ArtifactStore, engine: CryptographyEngine
    ) -> None:
        """Key, CSR, and certificate belong together and name the domain."""
        result = Orchestrator(store, engine).reset("b.com")

        key = deserialize_private_key(store.read(ArtifactKind.KEY))
        csr = deserialize_csr(store.read(ArtifactKind.REQUEST))
        cert = deserialize_certificate(store.read(ArtifactKind.CERTIFICATE))

        assert get_common_name(csr.subject) == "b.com"
        assert get_san_dns_names(csr) == ["b.com"]
        assert get_common_name(cert.subject) == "b.com"
        assert public_key_matches(key, csr)
        assert public_key_matches(key, cert)
        cert.verify_directly_issued_by(cert)
        assert result.certificate.common_name == "b.com"

    def test_reset_matches_sequential_operations(
        self, tmp_path, engine: CryptographyEngine
    ) -> None:
        """reset(d) yields the same CN/SAN/validity as generate; build(d); sign."""
        sequential = ArtifactStore(TLSConfig(target_dir=tmp_path / "sequential"))
        KeyGenerator(sequential, engine).generate()
        RequestBuilder(sequential, engine).build("b.com")
        CertificateSigner(sequential, engine).sign()

        pipelined = ArtifactStore(TLSConfig(target_dir=tmp_path / "pipelined"))
        Orchestrator(pipelined, engine).reset("b.com")

        seq_cert = deserialize_certificate(sequential.read(ArtifactKind.CERTIFICATE))
        pipe_cert = deserialize_certificate(pipelined.read(ArtifactKind.CERTIFICATE))

        assert seq_cert.subject == pipe_cert.subject
        assert get_san_dns_names(seq_cert) == get_san_dns_names(pipe_cert)
        assert (
            seq_cert.not_valid_after_utc - seq_cert.not_valid_before_utc
            == pipe_cert.not_valid_after_utc - pipe_cert.not_valid_before_utc
            == timedelta(days=365)
        )
        pipe_cert.verify_directly_issued_by(pipe_cert)

    def test_stage_results_in_order(
        self, store: ArtifactStore, engine: CryptographyEngine
    ) -> None:
        """Every stage reports success in key, request, sign order."""
        result = Orchestrator(store, engine).reset("b.com")

        assert [stage.name for stage in result.stages] == ["key", "request", "sign"]
        assert all(stage.ok and stage.error is None for stage in result.stages)
        assert result.key.key_path == store.path(ArtifactKind.KEY)
        assert result.request.csr_path == store.path(ArtifactKind.REQUEST)
        assert result.certificate.cert_path == store.path(ArtifactKind.CERTIFICATE)

    def test_empty_domain_runs_no_stage(self, store: ArtifactStore) -> None:
        """Empty domain is rejected before a key is generated."""
        engine = MagicMock()

        with pytest.raises(UsageError):
            Orchestrator(store, engine).reset("")

        engine.generate_key.assert_not_called()
        assert store.state() is ArtifactState.EMPTY


class TestResetFailFast:
    """Tests for fail-fast behaviour without rollback."""

    def test_key_failure_stops_pipeline(self, store: ArtifactStore) -> None:
        """A failing key stage is surfaced and later stages never run."""
        engine = MagicMock()
        error = EngineFailure("key generation failed: boom")
        engine.generate_key.side_effect = error

        with pytest.raises(EngineFailure) as exc_info:
            Orchestrator(store, engine).reset("b.com")

        assert exc_info.value is error
        engine.build_csr.assert_not_called()
        engine.self_sign.assert_not_called()
        assert store.state() is ArtifactState.EMPTY

    def test_sign_failure_keeps_new_key_and_csr(
        self, store: ArtifactStore, engine: CryptographyEngine
    ) -> None:
        """A failing sign stage leaves the fresh key and CSR on disk (no rollback)."""
        failing = MagicMock(wraps=engine)
        error = EngineFailure("self-signing failed: boom")
        failing.self_sign.side_effect = error

        with pytest.raises(EngineFailure) as exc_info:
            Orchestrator(store, failing).reset("b.com")

        assert exc_info.value is error
        assert store.state() is ArtifactState.KEY_AND_REQUEST
        csr = deserialize_csr(store.read(ArtifactKind.REQUEST))
        assert get_common_name(csr.subject) == "b.com"

    def test_sign_failure_leaves_stale_certificate(
        self, store: ArtifactStore, engine: CryptographyEngine
    ) -> None:
        """An existing certificate survives a failed reset untouched."""
        Orchestrator(store, engine).reset("old.com")
        old_cert = store.read(ArtifactKind.CERTIFICATE)

        failing = MagicMock(wraps=engine)
        failing.self_sign.side_effect = EngineFailure("self-signing failed: boom")

        with pytest.raises(EngineFailure):
            Orchestrator(store, failing).reset("new.com")

        assert store.read(ArtifactKind.CERTIFICATE) == old_cert
