"""Data request workflow: creation, status changes, approval and DPO lookup."""

import time
from typing import List, Optional, Union

from dataprivacy._registry.protocol import Translator
from dataprivacy._registry.sources.strings import StringTable
from dataprivacy.exceptions import DataRequestError, PermissionDeniedError
from dataprivacy.logging_config import logger

from .models import COMPONENT, DataRequest, DpoMessage, RequestStatus, RequestType
from .protocol import DataRequestStore, Messenger, OfficerDirectory, TaskQueue
from .settings import DataRequestSettings

# Task names queued for the host platform
INITIATE_TASK = "initiate_data_request"
PROCESS_TASK = "process_data_request"

DEFAULT_STRINGS = {
    COMPONENT: {
        "requesttypeexport": "Export all of my personal data",
        "requesttypedelete": "Delete all of my personal data",
        "requesttypeothers": "General inquiry",
        "datarequestemailsubject": "Data request: {type}",
        "datarequestemailmessage": (
            "Hi {dponame},\n\n"
            "{requestedby} has submitted a data request of type '{type}' for {requestfor}.\n\n"
            "Comments:\n{comments}"
        ),
    }
}


class DataRequestService:
    """
    Manages data requests and the officers who decide on them.

    Users create requests; site DPOs approve or deny them once the host
    platform has moved them to AWAITING_APPROVAL. Background work is handed
    to the task queue and officers are notified through the messenger.

    Example:
        service = DataRequestService(
            store=InMemoryDataRequestStore(),
            directory=directory,
            tasks=InMemoryTaskQueue(),
            messenger=RecordingMessenger(),
            settings=DataRequestSettings(dpo_roles=[1]),
        )
        request = service.create_data_request(user_id=5, request_type=RequestType.EXPORT)
    """

    def __init__(
        self,
        store: DataRequestStore,
        directory: OfficerDirectory,
        tasks: TaskQueue,
        messenger: Optional[Messenger] = None,
        settings: Optional[DataRequestSettings] = None,
        translator: Optional[Translator] = None,
    ) -> None:
        self.store = store
        self.directory = directory
        self.tasks = tasks
        self.messenger = messenger
        self.settings = settings or DataRequestSettings()
        self.translator = translator or StringTable(DEFAULT_STRINGS)

    def create_data_request(
        self,
        user_id: int,
        request_type: Union[RequestType, int],
        comments: str = "",
        requested_by: Optional[int] = None,
    ) -> DataRequest:
        """
        Create a data request and queue its initiation.

        Args:
            user_id: User the request is about
            request_type: Request type
            comments: Comments from the requester
            requested_by: Submitting user (defaults to user_id)

        Returns:
            The saved DataRequest with status PENDING

        Raises:
            DataRequestError: If the request type is invalid
        """
        try:
            request_type = RequestType(request_type)
        except ValueError:
            raise DataRequestError(f"Invalid data request type: {request_type}")

        request = self.store.create(
            DataRequest(
                user_id=user_id,
                requested_by=requested_by if requested_by is not None else user_id,
                type=request_type,
                status=RequestStatus.PENDING,
                comments=comments,
            )
        )
        self.tasks.queue(INITIATE_TASK, {"requestid": request.id})
        logger.info(f"Created {request_type.name.lower()} data request {request.id} for user {user_id}")
        return request

    def _get_request(self, request_id: int) -> DataRequest:
        request = self.store.get(request_id)
        if request is None:
            raise DataRequestError(f"Data request {request_id} not found")
        return request

    def update_request_status(
        self, request_id: int, status: Union[RequestStatus, int], dpo_id: Optional[int] = None
    ) -> bool:
        """
        Set the status of a request.

        Raises:
            DataRequestError: If the status is invalid or the request does not exist
        """
        try:
            status = RequestStatus(status)
        except ValueError:
            raise DataRequestError(f"Invalid data request status: {status}")

        request = self._get_request(request_id)
        request.status = status
        if dpo_id is not None:
            request.dpo = dpo_id
        request.time_modified = int(time.time())
        self.store.update(request)
        logger.debug(f"Data request {request_id} status -> {status.name}")
        return True

    def get_site_dpos(self) -> List[int]:
        """
        Return IDs of the site's data protection officers.

        Officers are users holding a configured DPO role who may manage data
        requests. With no such user the admin is returned, unless
        dpo_fallback_to_admin is disabled.
        """
        dpos: List[int] = []
        if self.settings.dpo_roles:
            dpos = [
                user_id
                for user_id in self.directory.users_with_roles(self.settings.dpo_roles)
                if self.directory.has_manage_capability(user_id)
            ]
        if not dpos and self.settings.dpo_fallback_to_admin:
            logger.debug("No users hold a DPO role, using the site admin")
            dpos = [self.directory.get_admin()]
        return dpos

    def is_site_dpo(self, user_id: int) -> bool:
        return user_id in self.get_site_dpos()

    def can_manage_data_requests(self, user_id: int) -> bool:
        """Check if a user is a site DPO holding the manage capability."""
        return self.is_site_dpo(user_id) and self.directory.has_manage_capability(user_id)

    def can_contact_dpo(self) -> bool:
        return self.settings.contact_dpo

    def _require_manager(self, actor_id: int) -> None:
        if not self.can_manage_data_requests(actor_id):
            raise PermissionDeniedError(f"User {actor_id} may not manage data requests")

    def approve_data_request(self, request_id: int, actor_id: int) -> bool:
        """
        Approve a request awaiting approval and queue its processing.

        Raises:
            PermissionDeniedError: If the actor is not a site DPO
            DataRequestError: If the request is not awaiting approval
        """
        self._require_manager(actor_id)
        request = self._get_request(request_id)
        if request.status != RequestStatus.AWAITING_APPROVAL:
            raise DataRequestError(f"Data request {request_id} is not awaiting approval")

        self.update_request_status(request_id, RequestStatus.APPROVED, dpo_id=actor_id)
        self.tasks.queue(PROCESS_TASK, {"requestid": request_id})
        logger.info(f"Data request {request_id} approved by user {actor_id}")
        return True

    def deny_data_request(self, request_id: int, actor_id: int) -> bool:
        """
        Deny a request awaiting approval.

        Raises:
            PermissionDeniedError: If the actor is not a site DPO
            DataRequestError: If the request is not awaiting approval
        """
        self._require_manager(actor_id)
        request = self._get_request(request_id)
        if request.status != RequestStatus.AWAITING_APPROVAL:
            raise DataRequestError(f"Data request {request_id} is not awaiting approval")

        self.update_request_status(request_id, RequestStatus.REJECTED, dpo_id=actor_id)
        logger.info(f"Data request {request_id} denied by user {actor_id}")
        return True

    def get_data_requests(self, user_id: Optional[int] = None, actor_id: Optional[int] = None) -> List[DataRequest]:
        """
        List data requests.

        With a user_id, returns that user's requests. Without one, returns
        every request if the actor may manage data requests, else nothing.
        """
        if user_id is not None:
            return self.store.list(user_id=user_id)
        if actor_id is None or not self.can_manage_data_requests(actor_id):
            return []
        return self.store.list()

    def has_ongoing_request(self, user_id: int, request_type: Union[RequestType, int]) -> bool:
        """Check if the user has an unfinished request of the given type."""
        request_type = RequestType(request_type)
        return any(r.type == request_type and r.is_active for r in self.store.list(user_id=user_id))

    @staticmethod
    def is_active(status: Union[RequestStatus, int]) -> bool:
        """Check if a request in this status still needs action."""
        return DataRequest(user_id=0, requested_by=0, type=RequestType.OTHERS, status=status).is_active

    def notify_dpo(self, dpo_id: int, request: DataRequest) -> int:
        """
        Tell an officer about a request.

        Returns:
            ID of the sent message

        Raises:
            DataRequestError: If no messenger is configured
            MissingTranslationError: If a message string is missing
        """
        if self.messenger is None:
            raise DataRequestError("No messenger configured for DPO notifications")

        type_string = self.translator.translate(request.type.string_id, COMPONENT)
        message = DpoMessage(
            user_from=request.requested_by,
            user_to=dpo_id,
            subject=self.translator.translate("datarequestemailsubject", COMPONENT, {"type": type_string}),
            full_message=self.translator.translate(
                "datarequestemailmessage",
                COMPONENT,
                {
                    "dponame": self.directory.full_name(dpo_id),
                    "requestedby": self.directory.full_name(request.requested_by),
                    "requestfor": self.directory.full_name(request.user_id),
                    "type": type_string,
                    "comments": request.comments,
                },
            ),
            request_id=request.id,
        )
        message_id = self.messenger.send(message)
        logger.info(f"Notified DPO {dpo_id} about data request {request.id}")
        return message_id
