"""
devagent - an autonomous backend developer agent

Generates web server code with an LLM, builds it, runs it, probes its
endpoints and feeds build errors back until the server works.
"""

__version__ = "0.1.0"
