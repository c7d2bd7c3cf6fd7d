"""KOL outreach message generator.

Merges deal terms into reusable message templates with conditional sections.
"""
