"""
List All Pull Requests Tool

Fetches pull requests from every Git repository in the configured project.

Repositories are queried concurrently (one request each) and merged in the
order the repository listing returned them. The merge is all-or-nothing: if
any repository fails, the whole call fails and no partial list is returned.
"""

import asyncio
import json

from ado_tools.ado_rest_client import AzureDevOpsRESTClient
from ado_tools.ado_rest_transformers import GitTransformer
from ado_tools.core import get_logger, log_with_context
from ado_tools.domain import PullRequestSummary, Repository

logger = get_logger(__name__)


async def _fetch_repository_pull_requests(
    client: AzureDevOpsRESTClient,
    repository: Repository,
    semaphore: asyncio.Semaphore | None,
) -> list[PullRequestSummary]:
    if semaphore is None:
        response = await client.get_pull_requests(repository.id)
    else:
        async with semaphore:
            response = await client.get_pull_requests(repository.id)

    return GitTransformer.transform_pull_requests_response(response)


async def list_all_pull_requests(client: AzureDevOpsRESTClient, max_concurrency: int | None = None) -> str:
    """
    Retrieve all pull requests across all repositories in the project.

    Args:
        client: Shared REST client for the configured project
        max_concurrency: Optional cap on in-flight repository requests (None = one per repository)

    Returns:
        JSON array text of pull request summaries, grouped by repository in listing order:
        [
            {
                "repositoryId": "repo-guid",
                "pullRequestId": 42,
                "title": "Fix bug",
                "status": "active",
                "createdBy": "John Doe",
                "creationDate": "2026-02-10T10:00:00Z"
            },
            ...
        ]

    Raises:
        RemoteRequestError: If the repository listing or any repository's pull request request fails
        MalformedResponseError: If any response lacks an expected field
    """
    repositories = GitTransformer.transform_repositories_response(await client.get_repositories())

    if not repositories:
        logger.info(f"No repositories found in project '{client.project}'")
        return "[]"

    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    tasks = [_fetch_repository_pull_requests(client, repository, semaphore) for repository in repositories]

    # Wait for every branch so no request is left running after we fail
    results = await asyncio.gather(*tasks, return_exceptions=True)

    failures = [
        (repository, result)
        for repository, result in zip(repositories, results, strict=True)
        if isinstance(result, BaseException)
    ]
    if failures:
        for repository, error in failures:
            logger.error(f"Failed to fetch pull requests for repository '{repository.id}': {error}")
        raise failures[0][1]

    pull_requests = [summary for repository_summaries in results for summary in repository_summaries]

    log_with_context(
        logger,
        "info",
        f"Fetched {len(pull_requests)} pull requests from {len(repositories)} repositories",
        project=client.project,
        repository_count=len(repositories),
        pull_request_count=len(pull_requests),
    )
    return json.dumps([summary.to_dict() for summary in pull_requests])
