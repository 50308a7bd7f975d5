# Pagination constants
PROJECT_PAGE_SIZE = 6  # Number of projects to load per page

# Infinite scroll constants
SCROLL_LOAD_THRESHOLD = 0.8  # Load the next page once this fraction of the list has been scrolled

# Filter constants
FILTER_DEBOUNCE_MS = 250  # Debounce time for search requests in milliseconds
