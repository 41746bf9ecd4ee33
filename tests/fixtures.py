"""
Test Fixtures and Constants
Shared test data to avoid hardcoded values across test files
"""

# Staff users (test databases only)
TEST_ADMIN_EMAIL = "admin@office-test.com"
TEST_EMPLOYEE_EMAIL = "employee@office-test.com"
TEST_USER_PASSWORD = "TestPassword123!"  # Test-only password, never used in production

# Client portal account
TEST_CLIENT_NAME = "Société Générale Test"
TEST_CLIENT_LOGIN = "societe.generale.test.1234"
TEST_CLIENT_PASSWORD = "ClientPass123!"

# Test document data
TEST_DOCUMENT_FILENAME = "contract.pdf"
TEST_DOCUMENT_CONTENT_TYPE = "application/pdf"

# Test file contents
TEST_PDF_CONTENT = b"%PDF-1.4 fake pdf content"
TEST_IMAGE_CONTENT = b"\x89PNG\r\n\x1a\n"  # Fake PNG header
