"""Google Consent Mode default-state checker."""
