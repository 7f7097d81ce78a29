"""PPF workshop job-tracking backend."""
