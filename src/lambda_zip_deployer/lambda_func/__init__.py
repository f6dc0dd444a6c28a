"""Lambda function and alias reconciliation."""
