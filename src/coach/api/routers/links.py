"""Link aggregation endpoints."""

from fastapi import APIRouter, Depends

from coach.api.deps import get_context_service
from coach.api.schemas import (
    AccountResponse,
    CredentialsRequest,
    DetailedContextResponse,
    FinancialSummaryResponse,
    TransactionResponse,
)
from coach.services import ContextService

router = APIRouter(prefix="/links", tags=["links"])


@router.post("/{link_id}/detailed-info", response_model=DetailedContextResponse)
def get_detailed_info(
    link_id: str,
    data: CredentialsRequest,
    service: ContextService = Depends(get_context_service),
) -> DetailedContextResponse:
    """Aggregate accounts, transactions, owner and income for a link."""
    view = service.get_detailed_context(link_id, data.to_credentials())
    summary = view.summary

    return DetailedContextResponse(
        link_id=view.link_id,
        owner_name=view.owner_name,
        has_data=view.has_data,
        account_count=len(view.accounts),
        transaction_count=len(view.transactions),
        total_balance=summary.total_balance,
        currency=summary.currency,
        accounts=[AccountResponse.model_validate(a) for a in view.accounts],
        transactions=[TransactionResponse.model_validate(t) for t in view.transactions],
        account_categories=view.account_categories,
        accounts_by_category={
            category: [AccountResponse.model_validate(a) for a in accounts]
            for category, accounts in view.accounts_by_category.items()
        },
        failed_resources=[r.value for r in view.failed_resources],
        financial_summary=FinancialSummaryResponse.model_validate(summary),
        context_line=view.context_line,
    )


@router.post("/{link_id}/financial-summary", response_model=FinancialSummaryResponse)
def get_financial_summary(
    link_id: str,
    data: CredentialsRequest,
    service: ContextService = Depends(get_context_service),
) -> FinancialSummaryResponse:
    """Build the full summary for a link; fails if any resource is unavailable."""
    summary = service.get_financial_summary(link_id, data.to_credentials())
    return FinancialSummaryResponse.model_validate(summary)
