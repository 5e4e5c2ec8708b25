"""
Church Record Use Cases

Members, volunteer teams, campaigns, donations, expenses and manual
financial records: all scoped to one church.
"""

from .church_record_use_case import ChurchRecordUseCase
from .member_use_case import MemberUseCase
from .volunteer_team_use_case import VolunteerTeamUseCase
from .campaign_use_case import CampaignUseCase
from .donation_use_case import DonationUseCase
from .expense_use_case import ExpenseUseCase
from .financial_record_use_case import FinancialRecordUseCase, FinancialSummary
from .church_stats_use_case import CategoryBreakdown, ChurchStats, ChurchStatsUseCase

__all__ = [
    "ChurchRecordUseCase",
    "MemberUseCase",
    "VolunteerTeamUseCase",
    "CampaignUseCase",
    "DonationUseCase",
    "ExpenseUseCase",
    "FinancialRecordUseCase",
    "FinancialSummary",
    "ChurchStatsUseCase",
    "ChurchStats",
    "CategoryBreakdown",
]
