"""
Routers module - API endpoint handlers organized by feature.

Each router handles a specific domain of the API:
- landing: Generate and edit landing pages with the AI service
- deploy: Publish generated pages to Netlify or Firebase Hosting
"""
