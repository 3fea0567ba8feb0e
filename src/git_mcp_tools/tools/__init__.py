"""Git tool handlers.

Each module defines one MCP tool: its input model, the business function
that drives git, and a handler that turns the outcome into a text
response:

- add: git_add
- commit: git_commit
- status: git_status
- branch_create: git_branch_create
- branch_list: git_branch_list
- branch_merge: git_branch_merge
- log: git_log
- checkout: git_checkout
- push: git_push
"""

from git_mcp_tools.tools.add import handle_git_add
from git_mcp_tools.tools.branch_create import handle_git_branch_create
from git_mcp_tools.tools.branch_list import handle_git_branch_list
from git_mcp_tools.tools.branch_merge import handle_git_branch_merge
from git_mcp_tools.tools.checkout import handle_git_checkout
from git_mcp_tools.tools.commit import handle_git_commit
from git_mcp_tools.tools.log import handle_git_log
from git_mcp_tools.tools.push import handle_git_push
from git_mcp_tools.tools.status import handle_git_status

__all__ = [
    "handle_git_add",
    "handle_git_branch_create",
    "handle_git_branch_list",
    "handle_git_branch_merge",
    "handle_git_checkout",
    "handle_git_commit",
    "handle_git_log",
    "handle_git_push",
    "handle_git_status",
]
