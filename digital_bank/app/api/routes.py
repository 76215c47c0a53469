from fastapi import APIRouter, Depends, Query, status

from ..core.config import get_settings
from ..core.dependencies import (
    get_account_service,
    get_auth_service,
    get_current_user_id,
    get_ledger_service,
    get_notification_service,
)
from ..models import (
    AccountCreate,
    AccountEnvelope,
    AccountListResponse,
    AccountResponse,
    LoginRequest,
    LoginResponse,
    MoneyMovementRequest,
    NotificationEnvelope,
    NotificationListResponse,
    NotificationResponse,
    RegisterRequest,
    TransactionEnvelope,
    TransactionListResponse,
    TransactionResponse,
    TransferRequest,
    UserResponse,
)
from ..services import AccountService, AuthService, LedgerService, NotificationService

settings = get_settings()


auth_router = APIRouter(prefix="/auth", tags=["auth"])

@auth_router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    return UserResponse.model_validate(service.register(payload))

@auth_router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    return service.login(payload)

accounts_router = APIRouter(prefix="/accounts", tags=["accounts"])

@accounts_router.get("", response_model=AccountListResponse)
def list_accounts(
    user_id: int = Depends(get_current_user_id),
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    accounts = service.list_accounts(user_id)
    return AccountListResponse(accounts=[AccountResponse.model_validate(a) for a in accounts])

@accounts_router.post("", response_model=AccountEnvelope, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    user_id: int = Depends(get_current_user_id),
    service: AccountService = Depends(get_account_service),
) -> AccountEnvelope:
    account = service.create_account(user_id, payload.account_type)
    return AccountEnvelope(account=AccountResponse.model_validate(account))

@accounts_router.get("/{account_id}", response_model=AccountEnvelope)
def get_account(
    account_id: int,
    user_id: int = Depends(get_current_user_id),
    service: AccountService = Depends(get_account_service),
) -> AccountEnvelope:
    account = service.get_account(account_id, user_id)
    return AccountEnvelope(account=AccountResponse.model_validate(account))

transactions_router = APIRouter(prefix="/transactions", tags=["transactions"])

@transactions_router.post(
    "/deposit", response_model=TransactionEnvelope, status_code=status.HTTP_201_CREATED
)
def deposit(
    payload: MoneyMovementRequest,
    user_id: int = Depends(get_current_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionEnvelope:
    transaction = service.deposit(payload.account_id, user_id, payload.amount, payload.description)
    return TransactionEnvelope(transaction=TransactionResponse.model_validate(transaction))

@transactions_router.post(
    "/withdraw", response_model=TransactionEnvelope, status_code=status.HTTP_201_CREATED
)
def withdraw(
    payload: MoneyMovementRequest,
    user_id: int = Depends(get_current_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionEnvelope:
    transaction = service.withdraw(payload.account_id, user_id, payload.amount, payload.description)
    return TransactionEnvelope(transaction=TransactionResponse.model_validate(transaction))

@transactions_router.post(
    "/transfer", response_model=TransactionEnvelope, status_code=status.HTTP_201_CREATED
)
def transfer(
    payload: TransferRequest,
    user_id: int = Depends(get_current_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionEnvelope:
    transaction = service.transfer(
        payload.from_account_id,
        payload.to_account_id,
        user_id,
        payload.amount,
        payload.description,
    )
    return TransactionEnvelope(transaction=TransactionResponse.model_validate(transaction))

@transactions_router.get("/{account_id}", response_model=TransactionListResponse)
def get_history(
    account_id: int,
    limit: int = Query(default=settings.list_default_limit, ge=1, le=settings.list_max_limit),
    user_id: int = Depends(get_current_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    history = service.get_history(account_id, user_id, limit=limit)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in history]
    )

notifications_router = APIRouter(prefix="/notifications", tags=["notifications"])

@notifications_router.get("", response_model=NotificationListResponse)
def list_notifications(
    limit: int = Query(default=settings.list_default_limit, ge=1, le=settings.list_max_limit),
    user_id: int = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    notifications = service.list_notifications(user_id, limit)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications]
    )

@notifications_router.patch("/{notification_id}/read", response_model=NotificationEnvelope)
def mark_notification_read(
    notification_id: int,
    user_id: int = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationEnvelope:
    notification = service.mark_as_read(notification_id, user_id)
    return NotificationEnvelope(notification=NotificationResponse.model_validate(notification))

__all__ = ["auth_router", "accounts_router", "transactions_router", "notifications_router"]
