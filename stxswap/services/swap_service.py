"""Server-side swap flow.

Sequences one swap attempt: resolve the output token, quote, fetch swap
parameters, translate arguments, normalize post-conditions, sign and
broadcast. Every step is awaited in turn and any failure aborts the attempt.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import SecretStr

from stxswap.clarity.c32 import C32Error, c32_address_decode
from stxswap.clients.bitflow.client import BitflowClient, NoRouteFoundError
from stxswap.clients.stacks.node import BroadcastResult, StacksNodeClient, TransactionRejectedError
from stxswap.clients.stacks.signer import ContractCallOptions, RemoteSigner, SignedTransaction
from stxswap.logging import log
from stxswap.models.bitflow import SwapExecutionData
from stxswap.models.network import NetworkConfig
from stxswap.models.transaction import AnchorMode, PostConditionMode
from stxswap.services.swap import SwapPlan, SwapRequest
from stxswap.settings.config import Settings, settings as default_settings
from stxswap.translation.arguments import translate_all
from stxswap.translation.post_conditions import normalize_all


class SwapConfigurationError(ValueError):
    """Raised when a swap request cannot be carried out as configured."""


class SwapService:
    """Runs swap attempts against the quoting service, signer and node."""

    def __init__(
        self,
        bitflow: BitflowClient,
        signer: RemoteSigner,
        node: StacksNodeClient,
        network: NetworkConfig,
        anchor_mode: AnchorMode = AnchorMode.ANY,
        post_condition_mode: PostConditionMode = PostConditionMode.DENY,
        sender_key: Optional[SecretStr] = None,
    ) -> None:
        self.bitflow = bitflow
        self.signer = signer
        self.node = node
        self.network = network
        self.anchor_mode = AnchorMode(anchor_mode)
        self.post_condition_mode = PostConditionMode(post_condition_mode)
        self.sender_key = sender_key

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "SwapService":
        """Build the service and its clients from application settings."""
        config = config or default_settings
        config.require_swap_config()
        network = config.network
        return cls(
            bitflow=BitflowClient(
                api_host=config.bitflow_api_host,
                api_key=config.bitflow_api_key.get_secret_value(),
                timeout=config.http_timeout,
            ),
            signer=RemoteSigner(
                signer_url=config.signer_url,
                token=config.signer_token.get_secret_value() if config.signer_token else None,
                timeout=config.http_timeout,
            ),
            node=StacksNodeClient(network=network, timeout=config.http_timeout),
            network=network,
            anchor_mode=AnchorMode(config.anchor_mode),
            post_condition_mode=PostConditionMode(config.post_condition_mode),
            sender_key=config.sender_key,
        )

    def check_sender_address(self, address: str) -> None:
        """The sender must be a valid address of the configured network."""
        try:
            version, _ = c32_address_decode(address)
        except C32Error as e:
            raise SwapConfigurationError(f"Invalid sender address {address!r}: {e}") from e
        if version not in self.network.address_versions:
            raise SwapConfigurationError(
                f"Sender address {address} (version {version}) does not belong to {self.network.name}"
            )

    async def _resolve_token_y(self, request: SwapRequest) -> str:
        if request.token_y_id:
            return request.token_y_id
        if request.token_y_index is None:
            raise SwapConfigurationError("Provide token_y_id or token_y_index")

        tokens = await self.bitflow.get_all_possible_token_y(request.token_x_id)
        try:
            token_y_id = tokens[request.token_y_index]
        except IndexError:
            raise SwapConfigurationError(
                f"token_y_index {request.token_y_index} out of range: "
                f"{request.token_x_id} has {len(tokens)} possible output tokens"
            ) from None
        log.info(f"Resolved token Y index={request.token_y_index} token_y={token_y_id}")
        return token_y_id

    async def _select_route(self, request: SwapRequest, token_y_id: str) -> Any:
        routes = await self.bitflow.get_all_possible_token_y_routes(request.token_x_id, token_y_id)
        if not routes:
            raise NoRouteFoundError(request.token_x_id, token_y_id)
        if not 0 <= request.route_index < len(routes):
            raise SwapConfigurationError(
                f"Invalid route index {request.route_index}: "
                f"{request.token_x_id} -> {token_y_id} has {len(routes)} candidate routes"
            )
        log.info(f"Selected route index={request.route_index} of {len(routes)}")
        return routes[request.route_index]

    async def plan_swap(self, request: SwapRequest) -> SwapPlan:
        """Everything up to signing: quote, swap params, translated call inputs."""
        if request.amount <= 0:
            raise SwapConfigurationError(f"Swap amount must be positive, got {request.amount}")
        self.check_sender_address(request.sender_address)

        token_y_id = await self._resolve_token_y(request)
        quote = await self.bitflow.get_quote_for_route(request.token_x_id, token_y_id, request.amount)
        # get_quote_for_route raises NoRouteFoundError when bestRoute is absent
        execution_data = SwapExecutionData.from_route(quote.bestRoute, request.amount)
        if request.route_index is not None:
            route = await self._select_route(request, token_y_id)
            execution_data = execution_data.model_copy(update={"route": route})

        swap_params = await self.bitflow.get_swap_params(
            execution_data, request.sender_address, request.slippage_tolerance
        )
        function_args = tuple(translate_all(swap_params.functionArgs))
        post_conditions = tuple(normalize_all(swap_params.postConditions))

        options = ContractCallOptions(
            contract_address=swap_params.contractAddress,
            contract_name=swap_params.contractName,
            function_name=swap_params.functionName,
            function_args=function_args,
            sender_address=request.sender_address,
            network=self.network,
            post_conditions=post_conditions,
            anchor_mode=self.anchor_mode,
            post_condition_mode=self.post_condition_mode,
            sender_key=self.sender_key,
        )
        log.info(
            f"Swap planned {request.token_x_id} -> {token_y_id} amount={request.amount} "
            f"contract={options.contract_id} function={options.function_name}"
        )
        return SwapPlan(
            request=request,
            token_y_id=token_y_id,
            quote=quote,
            execution_data=execution_data,
            swap_params=swap_params,
            function_args=function_args,
            post_conditions=post_conditions,
            options=options,
        )

    async def execute_plan(self, plan: SwapPlan) -> BroadcastResult:
        """Sign and broadcast a plan; a node rejection raises TransactionRejectedError."""
        signed: SignedTransaction = await self.signer.make_contract_call(plan.options)
        result = await self.node.broadcast_transaction(signed.raw)
        if not result.ok:
            if not result.txid:
                result = result.model_copy(update={"txid": signed.txid})
            raise TransactionRejectedError.from_result(result)
        return result

    async def run(self, request: SwapRequest, dry_run: bool = False) -> SwapPlan | BroadcastResult:
        """Plan and, unless ``dry_run``, execute one swap attempt."""
        try:
            plan = await self.plan_swap(request)
            if dry_run:
                log.info(f"Dry run, not broadcasting: {plan.summary()}")
                return plan
            result = await self.execute_plan(plan)
        except Exception as e:
            log.error(
                f"Swap failed {request.token_x_id} -> {request.token_y_id or request.token_y_index} "
                f"amount={request.amount}: {type(e).__name__}: {e}"
            )
            raise

        log.bind(SWAP_RESULT=True).info(
            f"{request.token_x_id} -> {plan.token_y_id} amount={request.amount} "
            f"txid={result.txid} explorer={self.network.explorer_tx_url(result.txid)}"
        )
        return result

    async def close(self) -> None:
        try:
            await self.bitflow.close()
        finally:
            try:
                await self.signer.close()
            finally:
                await self.node.close()
