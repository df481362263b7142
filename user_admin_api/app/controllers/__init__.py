"""
Request handlers.

A controller maps one inbound request to exactly one outbound response
by calling a single service function and translating its outcome into
a status code and a JSON body.
"""
