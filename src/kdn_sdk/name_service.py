"""
Name resolution domain logic.

Combines the registry's name-info and sale-state queries into a NameInfo,
applying the expiry rule and always taking availability and price from the
freshly fetched sale state.

Rules:
- name info is always fetched before sale state, never concurrently
- a name past expiry + 31 days is reported with cleared pricing and no
  availability, regardless of its sale state
- otherwise availability, sale flag and price come from the sale state,
  and the market price falls back to the name's last price, then 0
"""

from datetime import datetime
from typing import Optional

from .audit_logger import AuditLogger
from .dates import is_name_expired, transform_pact_date
from .enums import ErrorCode
from .models import PRICE_MAP, NameInfo, Result
from .names import ensure_kda_extension
from .query_executor import ChainQueryExecutor
from .response_parser import parse_pact_decimal


class NameService:
    """Name information and period pricing."""

    COMPONENT = "NameService"

    def __init__(
        self,
        executor: ChainQueryExecutor,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        self._executor = executor
        self._logger = logger

    async def fetch_name_info(
        self,
        name: str,
        network_id: str,
        owner: str,
        host: str,
        now: Optional[datetime] = None,
    ) -> Result[NameInfo]:
        """
        Fetch pricing and availability of a name.

        Args:
            name: The name, with or without '.kda'
            network_id: The network identifier
            owner: Account used as the query sender
            host: Pact API base URL
            now: Reference time for the expiry rule (defaults to current time)

        Returns:
            Result with NameInfo, or the first failing query's message
        """
        formatted_name = ensure_kda_extension(name)

        info_response = await self._executor.fetch_raw_name_info(
            formatted_name, network_id, owner, host
        )
        if not info_response.success:
            return Result.fail(info_response.error, info_response.error_code)

        sale_response = await self._executor.fetch_sale_state(
            formatted_name, network_id, host
        )
        if not sale_response.success:
            return Result.fail(sale_response.error, sale_response.error_code)

        payload = info_response.data or {}
        sale_state = sale_response.data
        expiry_date = transform_pact_date(payload.get("expiryDate"))

        if expiry_date is not None and is_name_expired(expiry_date, now):
            if self._logger:
                self._logger.info(
                    self.COMPONENT,
                    f"Name {formatted_name} is past its grace period",
                    {"expiry_date": expiry_date.isoformat()},
                )
            return Result.ok(NameInfo(
                price=0.0,
                market_price=0.0,
                is_available=False,
                is_for_sale=False,
                expiry_date=expiry_date,
                last_price=None,
            ))

        last_price = parse_pact_decimal(payload.get("lastPrice"))
        if sale_state.price > 0:
            market_price = sale_state.price
        elif last_price is not None:
            market_price = last_price
        else:
            market_price = 0.0

        return Result.ok(NameInfo(
            price=sale_state.price,
            market_price=market_price,
            is_available=sale_state.sellable,
            is_for_sale=sale_state.sellable,
            expiry_date=expiry_date,
            last_price=last_price,
        ))

    async def fetch_price_by_period(
        self,
        period: int,
        network_id: str,
        owner: str,
        host: str,
    ) -> Result[float]:
        """
        Fetch the registry price for a registration period.

        Args:
            period: Key of PRICE_MAP (years)
            network_id: The network identifier
            owner: Account used as the query sender
            host: Pact API base URL
        """
        days = PRICE_MAP.get(period)
        if days is None:
            return Result.fail(
                f"Unsupported registration period: {period}",
                ErrorCode.VALIDATION_ERROR.value,
            )

        response = await self._executor.fetch_price(days, network_id, owner, host)
        if not response.success:
            return Result.fail(
                f"Failed to fetch price by period {period}: {response.error}",
                response.error_code,
            )
        return response
