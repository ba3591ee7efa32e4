from .user import User, UserRole
from .job import Job
from .proposal import Proposal, ProposalStatus
from .assignment import Assignment
from .chat import Chat, ChatParticipant, Message

__all__ = [
    "User",
    "UserRole",
    "Job",
    "Proposal",
    "ProposalStatus",
    "Assignment",
    "Chat",
    "ChatParticipant",
    "Message",
]
