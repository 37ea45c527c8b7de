from backoffice.models.customer import Customer
from backoffice.models.account import Account

__all__ = ["Customer", "Account"]
