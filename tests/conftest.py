import pytest


ENHANCED_DOCBLOCK = """
    /**
     * Test method with different query parameter annotation formats
     *
     * @queryParam page int Page number for pagination. Example: 1
     * @queryParam per_page int Items per page. Example: 10
     * @queryParam {string} search Search term to filter results
     * @queryParam status Filter by status (optional)
     * @queryParam sort_by string|array Sort field or array of sort fields
     * @queryParam createdAt Date filter for creation date. Example: 2023-01-01
     * @queryParam userEmail User email address to filter by. Example: user@example.com
     * @return array
     */
"""


@pytest.fixture
def enhanced_docblock():
    return ENHANCED_DOCBLOCK
