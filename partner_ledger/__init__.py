"""Partner ledger: referral-bonus partner balances and debt tracking."""
