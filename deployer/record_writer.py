"""Deployment record and ABI persistence."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from loguru import logger

from .exceptions import RecordWriteError


@dataclass
class DeploymentRecord:
    """Metadata for one completed deployment."""

    network: str
    chain_id: int
    contract_address: str
    deployer_address: str
    transaction_hash: str
    block_number: Optional[int]
    gas_used: str  # Provisioned gas limit (estimate + buffer), not gas consumed
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialise with the field names downstream consumers read."""
        return {
            "network": self.network,
            "chainId": self.chain_id,
            "contractAddress": self.contract_address,
            "deployerAddress": self.deployer_address,
            "transactionHash": self.transaction_hash,
            "blockNumber": self.block_number,
            "gasUsed": self.gas_used,
            "timestamp": self.timestamp,
        }


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """
    ISO-8601 UTC with millisecond precision and a Z suffix.

    Example: 2026-10-19T08:30:00.000Z
    """
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def record_filename(network_label: str) -> str:
    return f"{network_label}_deployment.json"


def abi_filename(contract_name: str) -> str:
    return f"{contract_name}_ABI.json"


class DeploymentRecordWriter:
    """Writes the deployment record and the contract ABI to the output directory."""

    def __init__(
        self,
        output_dir: Union[Path, str],
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            output_dir: Directory for both files (created if missing)
            clock: Source of the record timestamp
        """
        self.output_dir = Path(output_dir)
        self.clock = clock

    def build_record(
        self,
        network_label: str,
        chain_id: int,
        contract_address: str,
        deployer_address: str,
        transaction_hash: str,
        block_number: Optional[int],
        gas_limit: int,
    ) -> DeploymentRecord:
        """
        Create the record; the timestamp is taken now.

        Raises:
            RecordWriteError: If chain_id is negative
        """
        if chain_id < 0:
            raise RecordWriteError(
                f"chain_id must be non-negative, got {chain_id}",
                contract_address=contract_address,
                transaction_hash=transaction_hash,
            )

        return DeploymentRecord(
            network=network_label,
            chain_id=chain_id,
            contract_address=contract_address,
            deployer_address=deployer_address,
            transaction_hash=transaction_hash,
            block_number=block_number,
            gas_used=str(gas_limit),
            timestamp=format_timestamp(self.clock()),
        )

    def write(
        self,
        record: DeploymentRecord,
        contract_name: str,
        abi: List[Dict[str, Any]],
    ) -> Tuple[Path, Path]:
        """
        Write both files, overwriting any previous run for the same network.

        Args:
            record: Deployment record
            contract_name: Names the ABI file
            abi: Contract interface, written unchanged

        Returns:
            Tuple of (record_path, abi_path)

        Raises:
            RecordWriteError: If the directory or either file cannot be written
        """
        record_path = self.output_dir / record_filename(record.network)
        abi_path = self.output_dir / abi_filename(contract_name)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            _write_json(record_path, record.to_dict())
            logger.info(f"💾 Deployment information saved to: {record_path}")

            _write_json(abi_path, abi)
            logger.info(f"📄 Contract ABI saved to: {abi_path}")
        except OSError as e:
            raise RecordWriteError(
                f"Failed to save deployment artifacts in {self.output_dir}: {e}",
                contract_address=record.contract_address,
                transaction_hash=record.transaction_hash,
            ) from e

        return record_path, abi_path


def _write_json(path: Path, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(json.dumps(data, indent=2, ensure_ascii=False))
