"""Auth and patient record services for a patient-management system."""
