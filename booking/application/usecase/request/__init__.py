"""Mentor request use cases."""

from .decide_request import DecideRequestRequest, DecideRequestUseCase, MentorDecision
from .request_mentor import RequestMentorRequest, RequestMentorUseCase
from .withdraw_request import WithdrawRequestRequest, WithdrawRequestUseCase

__all__ = [
    "DecideRequestRequest",
    "DecideRequestUseCase",
    "MentorDecision",
    "RequestMentorRequest",
    "RequestMentorUseCase",
    "WithdrawRequestRequest",
    "WithdrawRequestUseCase",
]
