"""Git MCP Tools server.

This module registers the git tool handlers with a FastMCP server.

The server exposes the following tools:
- git_add: Stage files
- git_commit: Stage all changes and create a commit
- git_status: Get the status of a repository
- git_branch_create: Create a branch, optionally checking it out
- git_branch_list: List local and remote branches
- git_branch_merge: Merge one branch into another
- git_log: View commit history
- git_checkout: Switch branches, commits or tags, or restore files
- git_push: Push commits or tags to a remote

Example usage:
    # Run as standalone server
    $ git-mcp-tools

    # Or programmatically
    from git_mcp_tools.server import create_server
    server = create_server()
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from typing import Any, Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent

from git_mcp_tools import __version__
from git_mcp_tools.config import LOG_FORMATS, TRANSPORTS, ServerConfig
from git_mcp_tools.logging_config import configure_logging, new_tool_call_id
from git_mcp_tools.repository import RepositorySession
from git_mcp_tools.responses import ToolResponse
from git_mcp_tools.tools import (
    handle_git_add,
    handle_git_branch_create,
    handle_git_branch_list,
    handle_git_branch_merge,
    handle_git_checkout,
    handle_git_commit,
    handle_git_log,
    handle_git_push,
    handle_git_status,
)

logger = logging.getLogger(__name__)


def _to_content(response: ToolResponse) -> list[TextContent]:
    return [TextContent(type="text", text=block["text"]) for block in response["content"]]


def _run(tool: str, call: Callable[[], ToolResponse]) -> list[TextContent]:
    tool_call_id = new_tool_call_id()
    logger.info("Tool call %s started: %s", tool_call_id, tool)
    response = call()
    logger.info("Tool call %s finished: %s", tool_call_id, tool)
    return _to_content(response)


def _params(**arguments: Any) -> dict[str, Any]:
    """Drop arguments the client left unset so model defaults apply."""
    return {name: value for name, value in arguments.items() if value is not None}


def create_server(
    config: ServerConfig | None = None,
    session: RepositorySession | None = None,
) -> FastMCP:
    """Create and configure the Git MCP server.

    Args:
        config: Server configuration. Read from the environment if None.
        session: Repository session shared by all tool calls. A new one,
            caching according to the configuration, is created if None.

    Returns:
        Configured FastMCP server instance.
    """
    config = config or ServerConfig()
    if session is None:
        session = RepositorySession(cache=bool(config.cache_repositories))

    mcp = FastMCP(config.name, json_response=True)

    @mcp.tool(
        name="git_add",
        description="Add files to the git staging area",
        structured_output=False,
    )
    def git_add(repoPath: str, files: list[str] | None = None) -> list[TextContent]:
        params = _params(repoPath=repoPath, files=files)
        return _run("git_add", lambda: handle_git_add(params, session=session))

    @mcp.tool(
        name="git_commit",
        description="Create a git commit in the specified repository",
        structured_output=False,
    )
    def git_commit(repoPath: str, message: str) -> list[TextContent]:
        return _run(
            "git_commit",
            lambda: handle_git_commit(repoPath, message, session=session),
        )

    @mcp.tool(
        name="git_status",
        description="Get the status of a git repository",
        structured_output=False,
    )
    def git_status(repoPath: str) -> list[TextContent]:
        return _run("git_status", lambda: handle_git_status(repoPath, session=session))

    @mcp.tool(
        name="git_branch_create",
        description="Create a new git branch, optionally checking it out",
        structured_output=False,
    )
    def git_branch_create(
        repoPath: str,
        branchName: str,
        baseBranch: str | None = None,
        checkout: bool = False,
    ) -> list[TextContent]:
        params = _params(
            repoPath=repoPath,
            branchName=branchName,
            baseBranch=baseBranch,
            checkout=checkout,
        )
        return _run(
            "git_branch_create",
            lambda: handle_git_branch_create(params, session=session),
        )

    @mcp.tool(
        name="git_branch_list",
        description="List branches in a git repository",
        structured_output=False,
    )
    def git_branch_list(repoPath: str, includeRemote: bool = False) -> list[TextContent]:
        params = _params(repoPath=repoPath, includeRemote=includeRemote)
        return _run(
            "git_branch_list",
            lambda: handle_git_branch_list(params, session=session),
        )

    @mcp.tool(
        name="git_branch_merge",
        description="Merge a branch into the target (or current) branch",
        structured_output=False,
    )
    def git_branch_merge(
        repoPath: str,
        sourceBranch: str,
        targetBranch: str | None = None,
        strategy: Literal["merge", "fast-forward", "squash"] | None = None,
        message: str | None = None,
        noCommit: bool | None = None,
    ) -> list[TextContent]:
        params = _params(
            repoPath=repoPath,
            sourceBranch=sourceBranch,
            targetBranch=targetBranch,
            strategy=strategy,
            message=message,
            noCommit=noCommit,
        )
        return _run(
            "git_branch_merge",
            lambda: handle_git_branch_merge(params, session=session),
        )

    @mcp.tool(
        name="git_log",
        description="Get the commit history of a git repository",
        structured_output=False,
    )
    def git_log(
        repoPath: str,
        maxCount: int = 10,
        branch: str | None = None,
    ) -> list[TextContent]:
        params = _params(repoPath=repoPath, maxCount=maxCount, branch=branch)
        return _run("git_log", lambda: handle_git_log(params, session=session))

    @mcp.tool(
        name="git_checkout",
        description="Checkout a branch, commit or tag, or restore specific files",
        structured_output=False,
    )
    def git_checkout(
        repoPath: str,
        target: str,
        force: bool = False,
        files: list[str] | None = None,
    ) -> list[TextContent]:
        params = _params(repoPath=repoPath, target=target, force=force, files=files)
        return _run("git_checkout", lambda: handle_git_checkout(params, session=session))

    @mcp.tool(
        name="git_push",
        description="Push commits or tags to a remote repository",
        structured_output=False,
    )
    def git_push(
        repoPath: str,
        remote: str | None = None,
        branch: str | None = None,
        tags: bool | None = None,
        force: bool | None = None,
        setUpstream: bool | None = None,
        deleteRemote: bool | None = None,
    ) -> list[TextContent]:
        params = _params(
            repoPath=repoPath,
            remote=remote,
            branch=branch,
            tags=tags,
            force=force,
            setUpstream=setUpstream,
            deleteRemote=deleteRemote,
        )
        return _run("git_push", lambda: handle_git_push(params, session=session))

    return mcp


def main() -> None:
    """Run the Git MCP server."""
    parser = argparse.ArgumentParser(
        prog="git-mcp-tools",
        description="Serve git operations as MCP tools",
    )
    parser.add_argument("--transport", choices=TRANSPORTS, help="MCP transport")
    parser.add_argument("--log-level", help="Logging level (e.g. DEBUG, INFO)")
    parser.add_argument("--log-format", choices=LOG_FORMATS, help="Log output format")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args()

    config = ServerConfig(
        transport=args.transport or "",
        log_level=args.log_level or "",
        log_format=args.log_format or "",
    )
    configure_logging(config.log_level, config.log_format)

    with RepositorySession(cache=bool(config.cache_repositories)) as session:
        server = create_server(config, session)
        logger.info("Starting %s on %s", config.name, config.transport)
        server.run(transport=config.transport)


if __name__ == "__main__":
    main()
