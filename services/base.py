"""Base services container for dependency injection."""

from datetime import date

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
        today: Optional callable returning the current date. Defaults to date.today.
    """

    def __init__(self, config: Config, db_manager=None, today=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
            today: Clock used wherever a default month is needed.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)
        self.today = today or date.today

        # Lazy import to avoid circular dependencies
        from services.users import UserService
        from services.categories import CategoryService
        from services.transactions import TransactionService
        from services.budgets import BudgetService
        from services.statistics import StatisticsService

        self.users = UserService(self.db_manager)
        self.categories = CategoryService(self.db_manager)
        self.transactions = TransactionService(self.db_manager, self.categories)
        self.budgets = BudgetService(self.db_manager)
        self.statistics = StatisticsService(
            self.transactions, self.budgets, self.categories
        )
