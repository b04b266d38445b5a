# Supplier Directory API
"""
REST API for the office equipment supplier directory.

Endpoints:
- GET  /api/public/vendors - Ranked, filtered, paginated supplier listing
- POST /api/public/quote-request - Quote request intake (creates a lead)
- GET  /api/public/categories - Service catalogue
- GET  /api/public/categories/{slug} - Category overview with popular locations
- GET  /api/public/categories/{slug}/{location} - Local and national suppliers for a location
"""
