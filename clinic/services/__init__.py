"""Services for the clinic booking flow."""
