"""Protocol adapters for serving curlcase tools."""
