"""
Uploader Interface

Abstract interface for the three storage upload steps.
Follows Dependency Inversion Principle - the pipeline depends on this
abstraction, not on the concrete HTTP implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from upload.constants import UploadErrorKind


@dataclass
class FileEntry:
    """
    Result of step 1.

    Attributes:
        file_id: Storage identifier of the new file
        upload_url: Presigned URL the binary is PUT to
    """

    file_id: str
    upload_url: str

    @classmethod
    def from_response(cls, data: Any) -> "FileEntry":
        """
        Parse the create-file reply.

        Raises:
            UploadInvalidResponseError: If required fields are missing
        """
        if not isinstance(data, dict):
            raise UploadInvalidResponseError("expected a JSON object")
        try:
            return cls(file_id=str(data["file_id"]), upload_url=str(data["upload_url"]))
        except KeyError as e:
            raise UploadInvalidResponseError(f"missing field {e}") from e


@dataclass
class CallMetadata:
    """
    Metadata attached to an uploaded recording (step 3).

    Optional fields left as None are omitted from the JSON body.
    """

    file_id: str
    title: Optional[str] = None
    recorded_datetime: Optional[str] = None
    provider: Optional[str] = None
    webcam_primary_user: Optional[int] = None
    is_private: Optional[bool] = None
    speakers: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


class UploaderInterface(ABC):
    """
    Abstract base class for storage uploaders.

    The three steps are called strictly in order by UploadPipeline; an
    implementation never retries on its own.
    """

    @abstractmethod
    def create_file_entry(self, access_token: str, file_name: str) -> FileEntry:
        """
        Register a new file with the storage service.

        Args:
            access_token: Bearer token (sent verbatim as Authorization)
            file_name: Base name of the recording; its extension picks the
                file type

        Returns:
            FileEntry with id and presigned upload URL

        Raises:
            UploadNetworkError: Transport failure or non-2xx status
            UploadInvalidResponseError: Reply could not be parsed
        """

    @abstractmethod
    def upload_binary(self, upload_url: str, file_path: Path) -> None:
        """
        Transfer the whole recording to the presigned URL.

        Raises:
            UploadIoError: File could not be read
            UploadNetworkError: Transport failure or non-2xx status
        """

    @abstractmethod
    def create_metadata(
        self,
        access_token: str,
        file_id: str,
        metadata: CallMetadata,
    ) -> None:
        """
        Attach call metadata to an uploaded file.

        Raises:
            UploadNetworkError: Transport failure or non-2xx status
        """


class UploaderError(Exception):
    """
    Exception raised for upload-related errors.

    Examples:
    - Storage service unreachable
    - Recording file unreadable
    - Malformed server reply
    """

    prefix = "Upload error"

    def __init__(self, message: str, kind: UploadErrorKind = UploadErrorKind.NETWORK):
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.prefix}: {self.args[0]}"


class UploadNetworkError(UploaderError):
    prefix = "Network error"

    def __init__(self, message: str):
        super().__init__(message, UploadErrorKind.NETWORK)


class UploadIoError(UploaderError):
    prefix = "I/O error"

    def __init__(self, message: str):
        super().__init__(message, UploadErrorKind.IO)


class UploadInvalidResponseError(UploaderError):
    prefix = "Invalid response"

    def __init__(self, message: str):
        super().__init__(message, UploadErrorKind.INVALID_RESPONSE)

