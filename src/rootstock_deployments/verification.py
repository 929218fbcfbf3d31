"""Block explorer verification for rootstock-deployments library."""

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

import requests

from .artifacts import encode_constructor_args, load_artifact, load_build_info
from .constants import SOURCIFY_SERVER_URL
from .exceptions import (
    ArtifactError,
    ArtifactNotFoundError,
    ConstructorArgumentsError,
    VerificationError,
)
from .paths import get_default_artifacts_dir
from .types import (
    BuildInfo,
    ContractArtifact,
    ContractHandle,
    DeployerConfig,
    NetworkProfile,
    VerificationProfile,
    VerificationResult,
)

logger = logging.getLogger(__name__)


class BlockscoutVerifier:
    """Verifies contracts through Blockscout's etherscan-compatible API."""

    service = "blockscout"

    def __init__(
        self,
        profile: VerificationProfile,
        session: Optional[requests.Session] = None,
        poll_interval: float = 5.0,
        timeout: float = 120.0,
    ):
        self.profile = profile
        self._session = session or requests.Session()
        self.poll_interval = poll_interval
        self.timeout = timeout

    def _request(self, method: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = self._session.request(
                method, self.profile.api_base_url, timeout=30, **kwargs
            )
        except requests.RequestException as e:
            raise VerificationError(f"Network error talking to explorer: {e}") from e

        if response.status_code != 200:
            raise VerificationError(
                f"Explorer request failed with status {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise VerificationError("Explorer returned invalid JSON") from e

    def explorer_link(self, address: str) -> str:
        return f"{self.profile.explorer_url.rstrip('/')}/address/{address}#code"

    def verify(
        self, handle: ContractHandle, artifact: ContractArtifact, build_info: BuildInfo
    ) -> VerificationResult:
        """
        Submit a contract's standard-JSON input and wait for the verdict.

        Args:
            handle: Deployed contract
            artifact: Artifact the contract was deployed from
            build_info: Compiler input/output for the artifact

        Returns:
            Successful VerificationResult

        Raises:
            VerificationError: If submission fails or the explorer rejects the source
        """
        try:
            constructor_args = encode_constructor_args(artifact.abi, handle.constructor_args)
        except ConstructorArgumentsError as e:
            raise VerificationError(
                f"Cannot encode constructor arguments of {handle.contract_name}: {e}"
            ) from e

        submitted = self._request(
            "POST",
            data={
                "apikey": self.profile.api_key,
                "module": "contract",
                "action": "verifysourcecode",
                "contractaddress": handle.address,
                "sourceCode": json.dumps(build_info.input),
                "codeformat": "solidity-standard-json-input",
                "contractname": artifact.fully_qualified_name,
                "compilerversion": f"v{build_info.solc_long_version}",
                # Misspelling is part of the etherscan API
                "constructorArguements": constructor_args,
            },
        )

        message = str(submitted.get("result", ""))
        if submitted.get("status") != "1":
            if "already verified" in message.lower():
                return self._success(handle, message)
            raise VerificationError(
                f"Explorer rejected {handle.contract_name}: {message or submitted.get('message')}"
            )

        return self._wait_for_status(handle, guid=message)

    def _wait_for_status(self, handle: ContractHandle, guid: str) -> VerificationResult:
        deadline = time.monotonic() + self.timeout
        while True:
            status = self._request(
                "GET",
                params={
                    "apikey": self.profile.api_key,
                    "module": "contract",
                    "action": "checkverifystatus",
                    "guid": guid,
                },
            )
            message = str(status.get("result", ""))
            lowered = message.lower()

            if "pending" not in lowered:
                if lowered.startswith("pass") or "already verified" in lowered:
                    return self._success(handle, message)
                raise VerificationError(
                    f"Verification of {handle.contract_name} failed: {message}"
                )

            if time.monotonic() >= deadline:
                raise VerificationError(
                    f"Timed out waiting for verification of {handle.contract_name}"
                )
            time.sleep(self.poll_interval)

    def _success(self, handle: ContractHandle, message: str) -> VerificationResult:
        return VerificationResult(
            contract_name=handle.contract_name,
            address=handle.address,
            service=self.service,
            verified=True,
            message=message,
            url=self.explorer_link(handle.address),
        )


class SourcifyVerifier:
    """Verifies contracts by uploading metadata and sources to Sourcify."""

    service = "sourcify"

    def __init__(self, server_url: str = SOURCIFY_SERVER_URL, session: Optional[requests.Session] = None):
        self.server_url = server_url.rstrip("/")
        self._session = session or requests.Session()

    def verify(
        self,
        handle: ContractHandle,
        chain_id: int,
        artifact: ContractArtifact,
        build_info: BuildInfo,
    ) -> VerificationResult:
        """
        Upload metadata.json plus sources for a deployed contract.

        Raises:
            VerificationError: If metadata is missing or Sourcify doesn't match
        """
        try:
            metadata = build_info.output["contracts"][artifact.source_name][
                artifact.contract_name
            ]["metadata"]
        except KeyError:
            raise VerificationError(
                f"Build info has no metadata for {artifact.fully_qualified_name}"
            ) from None

        files = {"metadata.json": metadata}
        for source_name, source in build_info.input.get("sources", {}).items():
            files[source_name] = source["content"]

        try:
            response = self._session.post(
                f"{self.server_url}/verify",
                json={"address": handle.address, "chain": str(chain_id), "files": files},
                timeout=60,
            )
            body = response.json()
        except requests.RequestException as e:
            raise VerificationError(f"Network error talking to Sourcify: {e}") from e
        except ValueError as e:
            raise VerificationError("Sourcify returned invalid JSON") from e

        if response.status_code != 200 or "error" in body:
            raise VerificationError(
                f"Sourcify rejected {handle.contract_name}: {body.get('error', response.status_code)}"
            )

        results = body.get("result") or [{}]
        status = results[0].get("status")
        if status not in ("perfect", "partial"):
            raise VerificationError(
                f"Sourcify could not match {handle.contract_name} (status {status})"
            )

        match_dir = "full_match" if status == "perfect" else "partial_match"
        return VerificationResult(
            contract_name=handle.contract_name,
            address=handle.address,
            service=self.service,
            verified=True,
            message=status,
            url=f"https://repo.sourcify.dev/contracts/{match_dir}/{chain_id}/{handle.address}/",
        )


def _load_sources(
    handle: ContractHandle, artifacts_dir: Path, solidity: str
) -> Tuple[ContractArtifact, BuildInfo]:
    try:
        artifact = load_artifact(artifacts_dir, handle.contract_name)
        build_info = load_build_info(artifact)
    except (ArtifactNotFoundError, ArtifactError) as e:
        raise VerificationError(str(e)) from e
    except KeyError as e:
        raise VerificationError(
            f"Build info for {handle.contract_name} is missing field {e}"
        ) from e
    except ValueError as e:
        # Truncated or otherwise unreadable artifact JSON
        raise VerificationError(
            f"Cannot read compiler output for {handle.contract_name}: {e}"
        ) from e

    if build_info.solc_version != solidity:
        raise VerificationError(
            f"{handle.contract_name} was compiled with solc {build_info.solc_version}, "
            f"expected {solidity}"
        )
    return artifact, build_info


def verify_handles(
    handles: Iterable[ContractHandle],
    config: DeployerConfig,
    network: NetworkProfile,
    artifacts_dir: Optional[Union[Path, str]] = None,
    blockscout: Optional[BlockscoutVerifier] = None,
    sourcify: Optional[SourcifyVerifier] = None,
) -> List[VerificationResult]:
    """
    Verify deployed contracts with every configured service.

    Failures are reported as unverified results; they never raise and never
    undo a deployment.

    Args:
        handles: Deployed contracts
        config: Deployer configuration (compiler pin, explorer profiles)
        network: Network the contracts live on
        artifacts_dir: Hardhat artifacts directory (defaults to ./artifacts)
        blockscout: Explorer verifier (defaults to one for the network's profile)
        sourcify: Sourcify verifier (defaults to the public server)

    Returns:
        One VerificationResult per contract and service
    """
    artifacts_dir = Path(artifacts_dir) if artifacts_dir else get_default_artifacts_dir()

    services: List[Tuple[str, Callable[..., VerificationResult]]] = []

    if blockscout is None:
        profile = config.verification_for(network)
        if profile is not None:
            blockscout = BlockscoutVerifier(profile)
        else:
            logger.info("No explorer configured for %s, skipping Blockscout", network.name)
    if blockscout is not None:
        services.append((blockscout.service, blockscout.verify))

    if config.sourcify_enabled:
        sourcify = sourcify or SourcifyVerifier()
        services.append(
            (sourcify.service, lambda h, a, b: sourcify.verify(h, network.chain_id, a, b))
        )

    results: List[VerificationResult] = []
    for handle in handles:
        try:
            artifact, build_info = _load_sources(handle, artifacts_dir, config.solidity)
        except VerificationError as e:
            logger.warning("Cannot verify %s: %s", handle.contract_name, e)
            results.extend(_failure(handle, name, e) for name, _ in services)
            continue

        for name, run in services:
            try:
                result = run(handle, artifact, build_info)
            except VerificationError as e:
                logger.warning("%s verification of %s failed: %s", name, handle.contract_name, e)
                result = _failure(handle, name, e)
            else:
                logger.info("%s verified on %s: %s", handle.contract_name, name, result.url)
            results.append(result)

    return results


def _failure(handle: ContractHandle, service: str, error: Exception) -> VerificationResult:
    return VerificationResult(
        contract_name=handle.contract_name,
        address=handle.address,
        service=service,
        verified=False,
        message=str(error),
    )
