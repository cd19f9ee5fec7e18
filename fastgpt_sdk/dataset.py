"""
Dataset (knowledge base) API – datasets, collections, data and search tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from fastgpt_sdk.models import (
    CollectionCreateAPIRequest,
    CollectionCreateExternalFileRequest,
    CollectionCreateLinkRequest,
    CollectionCreateRequest,
    CollectionCreateResponse,
    CollectionCreateTextRequest,
    CollectionInfo,
    CollectionListRequest,
    CollectionPage,
    CollectionUpdateRequest,
    DataListRequest,
    DataPage,
    DataPushRequest,
    DataPushResponse,
    DatasetCreateRequest,
    DatasetData,
    DatasetInfo,
    DatasetTrainOrderRequest,
    DataUpdateRequest,
    SearchTestRequest,
    SearchTestResult,
)

if TYPE_CHECKING:
    from fastgpt_sdk.client import FastGPTClient


class DatasetAPI:
    """
    Knowledge base management. Access via ``client.dataset``.

    A dataset holds collections (documents, links, text blocks); a
    collection holds data items (Q/A chunks with their vector indexes).
    """

    def __init__(self, client: "FastGPTClient"):
        self._client = client

    # ──────────────────────────────────────────────────────────
    # DATASETS
    # ──────────────────────────────────────────────────────────

    async def acreate_dataset(self, request: DatasetCreateRequest) -> str:
        """Create a dataset or folder and return its ID (async)."""
        data = await self._client._request(
            "POST", "/api/core/dataset/create", json=request.to_payload()
        )
        return str(data or "")

    def create_dataset(self, request: DatasetCreateRequest) -> str:
        """Create a dataset (sync)."""
        return self._client._sync(self.acreate_dataset(request))

    async def aget_dataset_list(self, parent_id: Optional[str] = None) -> List[DatasetInfo]:
        """List the datasets under a folder; ``None`` lists the root (async)."""
        data = await self._client._request(
            "POST", "/api/core/dataset/list", json={"parentId": parent_id}
        )
        return [DatasetInfo.model_validate(item) for item in data or []]

    def get_dataset_list(self, parent_id: Optional[str] = None) -> List[DatasetInfo]:
        """List datasets (sync)."""
        return self._client._sync(self.aget_dataset_list(parent_id))

    async def aget_dataset_detail(self, dataset_id: str) -> DatasetInfo:
        """Get a dataset (async)."""
        data = await self._client._request(
            "GET", "/api/core/dataset/detail", params={"id": dataset_id}
        )
        return DatasetInfo.model_validate(data or {})

    def get_dataset_detail(self, dataset_id: str) -> DatasetInfo:
        """Get a dataset (sync)."""
        return self._client._sync(self.aget_dataset_detail(dataset_id))

    async def adelete_dataset(self, dataset_id: str) -> None:
        """Delete a dataset (async)."""
        await self._client._request(
            "DELETE", "/api/core/dataset/delete", params={"id": dataset_id}
        )

    def delete_dataset(self, dataset_id: str) -> None:
        """Delete a dataset (sync)."""
        return self._client._sync(self.adelete_dataset(dataset_id))

    # ──────────────────────────────────────────────────────────
    # COLLECTIONS
    # ──────────────────────────────────────────────────────────

    async def acreate_collection(self, request: CollectionCreateRequest) -> str:
        """Create an empty collection and return its ID (async)."""
        data = await self._client._request(
            "POST", "/api/core/dataset/collection/create", json=request.to_payload()
        )
        return str(data or "")

    def create_collection(self, request: CollectionCreateRequest) -> str:
        """Create an empty collection (sync)."""
        return self._client._sync(self.acreate_collection(request))

    async def _create_trained_collection(self, path: str, request) -> CollectionCreateResponse:
        data = await self._client._request("POST", path, json=request.to_payload())
        return CollectionCreateResponse.model_validate(data or {})

    async def acreate_text_collection(
        self, request: CollectionCreateTextRequest
    ) -> CollectionCreateResponse:
        """Create a collection from plain text (async)."""
        return await self._create_trained_collection(
            "/api/core/dataset/collection/create/text", request
        )

    def create_text_collection(self, request: CollectionCreateTextRequest) -> CollectionCreateResponse:
        """Create a collection from plain text (sync)."""
        return self._client._sync(self.acreate_text_collection(request))

    async def acreate_link_collection(
        self, request: CollectionCreateLinkRequest
    ) -> CollectionCreateResponse:
        """Create a collection from a web link (async)."""
        return await self._create_trained_collection(
            "/api/core/dataset/collection/create/link", request
        )

    def create_link_collection(self, request: CollectionCreateLinkRequest) -> CollectionCreateResponse:
        """Create a collection from a web link (sync)."""
        return self._client._sync(self.acreate_link_collection(request))

    async def acreate_api_collection(
        self, request: CollectionCreateAPIRequest
    ) -> CollectionCreateResponse:
        """Create a collection from an API dataset file (async)."""
        return await self._create_trained_collection(
            "/api/core/dataset/collection/create/apiCollection", request
        )

    def create_api_collection(self, request: CollectionCreateAPIRequest) -> CollectionCreateResponse:
        """Create a collection from an API dataset file (sync)."""
        return self._client._sync(self.acreate_api_collection(request))

    async def acreate_external_file_collection(
        self, request: CollectionCreateExternalFileRequest
    ) -> CollectionCreateResponse:
        """Create a collection from an external file URL, commercial edition only (async)."""
        return await self._create_trained_collection(
            "/api/proApi/core/dataset/collection/create/externalFileUrl", request
        )

    def create_external_file_collection(
        self, request: CollectionCreateExternalFileRequest
    ) -> CollectionCreateResponse:
        """Create a collection from an external file URL (sync)."""
        return self._client._sync(self.acreate_external_file_collection(request))

    async def aget_collection_list(self, request: CollectionListRequest) -> CollectionPage:
        """Page through the collections of a dataset (async)."""
        data = await self._client._request(
            "POST", "/api/core/dataset/collection/listV2", json=request.to_payload()
        )
        return CollectionPage.model_validate(data or {})

    def get_collection_list(self, request: CollectionListRequest) -> CollectionPage:
        """Page through collections (sync)."""
        return self._client._sync(self.aget_collection_list(request))

    async def aget_collection_detail(self, collection_id: str) -> CollectionInfo:
        """Get a collection (async)."""
        data = await self._client._request(
            "GET", "/api/core/dataset/collection/detail", params={"id": collection_id}
        )
        return CollectionInfo.model_validate(data or {})

    def get_collection_detail(self, collection_id: str) -> CollectionInfo:
        """Get a collection (sync)."""
        return self._client._sync(self.aget_collection_detail(collection_id))

    async def aupdate_collection(self, request: CollectionUpdateRequest) -> None:
        """Rename, move, tag or disable a collection (async)."""
        await self._client._request(
            "PUT", "/api/core/dataset/collection/update", json=request.to_payload()
        )

    def update_collection(self, request: CollectionUpdateRequest) -> None:
        """Update a collection (sync)."""
        return self._client._sync(self.aupdate_collection(request))

    async def adelete_collection(self, collection_ids: List[str]) -> None:
        """Delete collections (async)."""
        await self._client._request(
            "POST",
            "/api/core/dataset/collection/delete",
            json={"collectionIds": list(collection_ids)},
        )

    def delete_collection(self, collection_ids: List[str]) -> None:
        """Delete collections (sync)."""
        return self._client._sync(self.adelete_collection(collection_ids))

    # ──────────────────────────────────────────────────────────
    # DATA
    # ──────────────────────────────────────────────────────────

    async def apush_data(self, request: DataPushRequest) -> DataPushResponse:
        """
        Add data items to a collection (async).

        At most 200 items per call. Items are queued for training; the
        response reports how many were inserted and which were rejected.
        """
        data = await self._client._request(
            "POST", "/api/core/dataset/data/pushData", json=request.to_payload()
        )
        return DataPushResponse.model_validate(data or {})

    def push_data(self, request: DataPushRequest) -> DataPushResponse:
        """Add data items to a collection (sync)."""
        return self._client._sync(self.apush_data(request))

    async def aget_data_list(self, request: DataListRequest) -> DataPage:
        """Page through the data items of a collection (async)."""
        data = await self._client._request(
            "POST", "/api/core/dataset/data/v2/list", json=request.to_payload()
        )
        return DataPage.model_validate(data or {})

    def get_data_list(self, request: DataListRequest) -> DataPage:
        """Page through data items (sync)."""
        return self._client._sync(self.aget_data_list(request))

    async def aget_data_detail(self, data_id: str) -> DatasetData:
        """Get a data item (async)."""
        data = await self._client._request(
            "GET", "/api/core/dataset/data/detail", params={"id": data_id}
        )
        return DatasetData.model_validate(data or {})

    def get_data_detail(self, data_id: str) -> DatasetData:
        """Get a data item (sync)."""
        return self._client._sync(self.aget_data_detail(data_id))

    async def aupdate_data(self, request: DataUpdateRequest) -> None:
        """Update a data item and its indexes (async)."""
        await self._client._request(
            "PUT", "/api/core/dataset/data/update", json=request.to_payload()
        )

    def update_data(self, request: DataUpdateRequest) -> None:
        """Update a data item (sync)."""
        return self._client._sync(self.aupdate_data(request))

    async def adelete_data(self, data_id: str) -> None:
        """Delete a data item (async)."""
        await self._client._request(
            "DELETE", "/api/core/dataset/data/delete", params={"id": data_id}
        )

    def delete_data(self, data_id: str) -> None:
        """Delete a data item (sync)."""
        return self._client._sync(self.adelete_data(data_id))

    # ──────────────────────────────────────────────────────────
    # SEARCH & TRAINING
    # ──────────────────────────────────────────────────────────

    async def asearch_test(self, request: SearchTestRequest) -> List[SearchTestResult]:
        """Run a retrieval test against a dataset (async)."""
        data = await self._client._request(
            "POST", "/api/core/dataset/searchTest", json=request.to_payload()
        )
        # Newer servers nest the hits under "list"
        if isinstance(data, dict):
            data = data.get("list", [])
        return [SearchTestResult.model_validate(item) for item in data or []]

    def search_test(self, request: SearchTestRequest) -> List[SearchTestResult]:
        """Run a retrieval test (sync)."""
        return self._client._sync(self.asearch_test(request))

    async def acreate_train_order(self, request: DatasetTrainOrderRequest) -> str:
        """Create a training bill and return its ID (async). Pass it as ``bill_id`` to push_data."""
        data = await self._client._request(
            "POST",
            "/api/support/wallet/usage/createTrainingUsage",
            json=request.to_payload(),
        )
        return str(data or "")

    def create_train_order(self, request: DatasetTrainOrderRequest) -> str:
        """Create a training bill (sync)."""
        return self._client._sync(self.acreate_train_order(request))
