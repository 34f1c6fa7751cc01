from ieltsmock.services.auth import AuthService
from ieltsmock.services.files import FileService
from ieltsmock.services.listening_audio import ListeningAudioService
from ieltsmock.services.mock_result import MockResultService
from ieltsmock.services.mock_submission import MockSubmissionService
from ieltsmock.services.test_management import TestManagementService
from ieltsmock.services.users import UserManagementService

__all__ = [
    "AuthService",
    "FileService",
    "ListeningAudioService",
    "MockResultService",
    "MockSubmissionService",
    "TestManagementService",
    "UserManagementService",
]
