"""
App statistics API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastgpt_sdk.models import AppChartData, AppChartDataRequest, AppTotalData

if TYPE_CHECKING:
    from fastgpt_sdk.client import FastGPTClient


class AppAPI:
    """Usage statistics of a FastGPT app. Access via ``client.app``."""

    def __init__(self, client: "FastGPTClient"):
        self._client = client

    async def aget_total_data(self, app_id: str) -> AppTotalData:
        """Get cumulative users, chats and points of an app (async)."""
        data = await self._client._request(
            "GET",
            "/api/proApi/core/app/logs/getTotalData",
            params={"appId": app_id},
        )
        return AppTotalData.model_validate(data or {})

    def get_total_data(self, app_id: str) -> AppTotalData:
        """Get cumulative app usage (sync)."""
        return self._client._sync(self.aget_total_data(app_id))

    async def aget_chart_data(self, request: AppChartDataRequest) -> AppChartData:
        """
        Get the log dashboard of an app (async).

        Args:
            request: App ID, ISO date range, sources and the timespan
                (day | week | month | quarter) of each series.

        Returns:
            AppChartData with user, chat and app series.
        """
        data = await self._client._request(
            "POST",
            "/api/proApi/core/app/logs/getChartData",
            json=request.to_payload(),
        )
        return AppChartData.model_validate(data or {})

    def get_chart_data(self, request: AppChartDataRequest) -> AppChartData:
        """Get the app log dashboard (sync)."""
        return self._client._sync(self.aget_chart_data(request))
