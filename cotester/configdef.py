"""cotester default configuration file

Every configuration element ever used in the program must exist here.
These defaults may be overridden in the user's config file.

The variables guaranteed to be available are set in config.environ()
"""


# Base URL of the backend serving recorded videos and screenshots.
# Artifact URLs are built as {media_base_url}/videos/<file> and {media_base_url}/screenshots/<file>
media_base_url = '{API_URL}'

# Browser assigned to test cases when the transcript never names one
default_browser = 'Chrome'

# Synthetic duration charged for each step of a test case, in seconds
step_duration_seconds = 2

# Project names matched case-insensitively as a last resort when a line mentions no
# declared scenario or spec file
legacy_titles = ['User Journey', 'User API Tests']
