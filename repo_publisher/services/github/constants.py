"""Constants for GitHub service."""

ACCEPT_HEADER = "application/vnd.github+json"

# Tree entry for a regular, non-executable file
BLOB_MODE = "100644"
BLOB_TYPE = "blob"

# Blob content is always sent base64 encoded so binary files survive
BLOB_ENCODING = "base64"

# Expected status codes per remote operation
EXPECTED_STATUS: dict[str, int] = {
    "create_repository": 201,
    "delete_repository": 204,
    "list_commits": 200,
    "get_commit": 200,
    "get_tree": 200,
    "create_tree": 201,
    "create_blob": 201,
    "create_commit": 201,
    "update_reference": 200,
    "get_user_emails": 200,
}
