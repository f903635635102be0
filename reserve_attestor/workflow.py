"""
Proof-of-Reserve trigger handler.

One call to `on_trigger` is one unit of work: validate config, collect
balance evidence, reconcile the off-chain reserve across nodes, encode the
report, sign it and write it. Every step either succeeds or aborts the run;
nothing is written on-chain unless all evidence was gathered.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import partial
from typing import Optional

from .config.settings import RunConfig, RuntimeSettings, validate_config
from .errors import AttestationError, ConfigError
from .models import ReconciledPrice
from .services.balance_service import collect_balance_evidence
from .services.consensus import RESERVE_AGGREGATION, NodeModeRunner
from .services.reserve_service import fetch_reserve_observation
from .services.signer import ReportSigner
from .services.submitter import submit_report
from .utils.encoding import encode_reports, feed_id_to_bytes
from .utils.web3_utils import EVMClient


@dataclass
class WorkflowRuntime:
    """Collaborators a run talks to."""
    evm_client: EVMClient
    node_runner: NodeModeRunner
    signer: ReportSigner
    gas_limit: int
    http_timeout: int = 30


def build_runtime(settings: RuntimeSettings) -> WorkflowRuntime:
    """Wire the web3, requests and eth-account collaborators from settings."""
    if not settings.rpc_url:
        raise ConfigError("POR_RPC_URL", "POR_RPC_URL is required to reach the chain")

    network = settings.network
    evm_client = EVMClient.from_rpc_url(
        settings.rpc_url,
        chain_id=network["chain_id"],
        chain_selector=network["chain_selector"],
        private_key=settings.private_key,
        receipt_timeout=settings.receipt_timeout,
    )
    print(f"[POR] Got EVM client for {network['name']} (chainSelector: {network['chain_selector']})")

    return WorkflowRuntime(
        evm_client=evm_client,
        node_runner=NodeModeRunner(node_count=settings.node_count),
        signer=ReportSigner(settings.report_signer_keys()),
        gas_limit=settings.gas_limit,
        http_timeout=settings.http_timeout,
    )


def on_trigger(
    config: RunConfig,
    runtime: WorkflowRuntime,
    scheduled_time: Optional[datetime] = None,
) -> str:
    """
    Run one attestation.

    Returns:
        Hex-encoded transaction hash of the committed report

    Raises:
        AttestationError subclasses; the run has written nothing on-chain
    """
    scheduled_time = scheduled_time or datetime.now(timezone.utc)
    print(f"\n[POR] PoR workflow started (scheduled: {scheduled_time.isoformat()})")

    try:
        validate_config(config)

        balances = collect_balance_evidence(runtime.evm_client, config)

        reserve = runtime.node_runner.run(
            partial(
                fetch_reserve_observation,
                url=config.url,
                feed_id=config.feed_id,
                timeout=runtime.http_timeout,
            ),
            RESERVE_AGGREGATION,
        )

        price = ReconciledPrice.from_reserve(feed_id_to_bytes(config.feed_id), reserve)
        print(f"[REPORT] Got price: {price.price}, for feed: 0x{price.feed_id.hex()}, at time: {price.timestamp}")

        encoded = encode_reports([price])
        print(f"[REPORT] ✓ Encoded report ({len(encoded)} bytes): 0x{encoded.hex()}")

        result = submit_report(
            runtime.evm_client,
            runtime.signer,
            config.data_feeds_cache_address,
            encoded,
            runtime.gas_limit,
        )
    except AttestationError as e:
        context = ", ".join(f"{k}={v}" for k, v in e.details.items() if v is not None)
        print(f"[POR] ✗ {type(e).__name__}: {e.message}" + (f" ({context})" if context else ""))
        raise

    print(
        f"[POR] ✓ PoR workflow completed: {result.tx_hash_hex} "
        f"(on-chain balances {balances.balance_one} / {balances.balance_two})"
    )
    return result.tx_hash_hex
