#!/usr/bin/env python3
# scripts/seed_sample_data.py
"""
Demo data: one user, one portfolio and a short trade history over the
seeded catalog. Run init_db.py first.
"""
import logging
import sys
from decimal import Decimal
from pathlib import Path

# Setup path to import finsight
root_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root_dir))

from sqlalchemy import select

from finsight.database import SessionLocal
from finsight.models import Alert, AlertCondition, Portfolio, Transaction, TransactionType, User
from finsight.utils import setup_logging

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"

DEMO_TRADES = [
    ("AAPL", TransactionType.BUY, "10", "170.00"),
    ("MSFT", TransactionType.BUY, "5", "360.00"),
    ("AAPL", TransactionType.BUY, "5", "182.50"),
    ("NVDA", TransactionType.BUY, "8", "440.00"),
    ("AAPL", TransactionType.SELL, "6", "190.00"),
    ("NVDA", TransactionType.SELL, "8", "470.00"),
]


def seed() -> None:
    db = SessionLocal()
    try:
        logger.info("Starting demo data seeding...")

        # 1. User
        user = db.scalars(select(User).where(User.email == DEMO_EMAIL)).first()
        if user is None:
            user = User(email=DEMO_EMAIL, name="Demo Investor")
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"Created user: {user.email}")
        else:
            logger.info(f"User exists: {user.email}")

        # 2. Portfolio
        portfolio = db.scalars(select(Portfolio).where(Portfolio.user_id == user.id)).first()
        if portfolio is None:
            portfolio = Portfolio(user_id=user.id, name="Growth", currency="USD")
            db.add(portfolio)
            db.commit()
            db.refresh(portfolio)
            logger.info(f"Created portfolio: {portfolio.name}")
        else:
            logger.info(f"Portfolio exists: {portfolio.name}")

        # 3. Trades, only into an empty ledger so replays stay valid
        has_trades = db.scalars(
            select(Transaction.id).where(Transaction.portfolio_id == portfolio.id)
        ).first()
        if has_trades is None:
            for symbol, transaction_type, quantity, price in DEMO_TRADES:
                db.add(Transaction(
                    portfolio_id=portfolio.id,
                    symbol=symbol,
                    transaction_type=transaction_type,
                    quantity=Decimal(quantity),
                    price=Decimal(price),
                ))
                # one commit per trade keeps created_at in ledger order
                db.commit()
            logger.info(f"Created {len(DEMO_TRADES)} transactions")

        # 4. An alert the simulator will eventually trip
        if db.scalars(select(Alert.id).where(Alert.user_id == user.id)).first() is None:
            db.add(Alert(
                user_id=user.id,
                symbol="AAPL",
                condition=AlertCondition.GT,
                price=Decimal("200.00"),
            ))
            db.commit()
            logger.info("Created demo alert AAPL > 200")

        logger.info("Seeding complete")

    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    seed()
