"""Comment routes.

``router`` serves the paginated contract (top-level comments with reply
counts, replies listed separately). ``legacy_router`` serves the older
shape where every top-level comment embeds its replies.
"""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from remark.application.usecase.comment import (
    CommentThreadItem,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ListCommentThreadsRequest,
    ListCommentThreadsUseCase,
    ListRepliesRequest,
    ListRepliesResponse,
    ListRepliesUseCase,
)
from remark.domain.error import (
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from remark.domain.service import JWTService

router = APIRouter(prefix="/api/comments", tags=["comments"], route_class=DishkaRoute)
legacy_router = APIRouter(
    prefix="/api/v1/comments", tags=["comments"], route_class=DishkaRoute
)


def _to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error onto its HTTP status."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))

    # Store failures and anything unexpected: log, answer generically
    logfire.error(
        "Comment request failed",
        error=str(error),
        error_type=type(error).__name__,
        storage=isinstance(error, StorageError),
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.get("", response_model=ListCommentsResponse)
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    page_id: str | None = Query(default=None, alias="pageId"),
    domain: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    skip: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    token: str | None = Header(default=None),
) -> ListCommentsResponse:
    """List top-level comments of a page or domain.

    Each comment carries ``repliesCount``; replies themselves are fetched
    through the replies endpoint.

    Args:
        list_comments_use_case: List comments use case from DI
        jwt_service: JWT service for resolving the viewer (injected)
        page_id: Page identifier (wins over ``domain`` when both are given)
        domain: Site hostname
        limit: Page size, default 10, at most 50
        skip: Number of comments to skip
        sort: ``desc`` for newest first, oldest first otherwise
        token: Viewer JWT (optional)

    Returns:
        Page of top-level comments with pagination metadata

    Raises:
        HTTPException: 400 if no usable filter, 500 on store failure
    """
    try:
        request = ListCommentsRequest(
            page_id=page_id,
            domain=domain,
            limit=limit,
            skip=skip,
            sort=sort,
            viewer_email=jwt_service.get_viewer_email(token),
        )
        return await list_comments_use_case.execute(request)
    except DomainError as e:
        raise _to_http_exception(e) from e


@router.get("/{comment_id}/replies", response_model=ListRepliesResponse)
async def list_replies(
    comment_id: str,
    list_replies_use_case: FromDishka[ListRepliesUseCase],
    jwt_service: FromDishka[JWTService],
    limit: str | None = Query(default=None),
    skip: str | None = Query(default=None),
    token: str | None = Header(default=None),
) -> ListRepliesResponse:
    """List direct replies of a comment, oldest first.

    Args:
        comment_id: Parent comment UUID
        list_replies_use_case: List replies use case from DI
        jwt_service: JWT service for resolving the viewer (injected)
        limit: Page size, default 10, at most 50
        skip: Number of replies to skip
        token: Viewer JWT (optional)

    Returns:
        Page of replies with pagination metadata

    Raises:
        HTTPException: 400 if the comment ID is malformed
    """
    try:
        request = ListRepliesRequest(
            comment_id=comment_id,
            limit=limit,
            skip=skip,
            viewer_email=jwt_service.get_viewer_email(token),
        )
        return await list_replies_use_case.execute(request)
    except DomainError as e:
        raise _to_http_exception(e) from e


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page_url: str = Field(min_length=1, max_length=2000)
    page_id: str = Field(min_length=1, max_length=500)
    body: str = Field(min_length=1, max_length=10000)
    author: str = Field(min_length=1, max_length=100)
    email: EmailStr
    parent_id: str | None = None  # Parent comment ID for replies


@router.post("", response_model=CreateCommentResponse)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Create a comment on a page or reply to another comment.

    Anonymous comments are allowed; a valid viewer token whose email matches
    marks the comment as verified.

    Args:
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for resolving the viewer (injected)
        token: Viewer JWT (optional)

    Returns:
        Created comment, including its email and deletion secret

    Raises:
        HTTPException: 400 on invalid data, 404 if the parent does not exist
    """
    try:
        use_case_request = CreateCommentRequest(
            page_url=request.page_url,
            page_id=request.page_id,
            body=request.body,
            author=request.author,
            email=request.email,
            parent_id=request.parent_id,
            viewer_email=jwt_service.get_viewer_email(token),
        )
        return await create_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise _to_http_exception(e) from e


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    secret: str | None = Query(default=None),
    token: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Delete a comment with its deletion secret or as its author.

    Replies of the deleted comment are kept.

    Args:
        comment_id: Comment UUID
        delete_comment_use_case: Delete comment use case from DI
        jwt_service: JWT service for resolving the viewer (injected)
        secret: Deletion secret returned at creation
        token: Viewer JWT (optional)

    Returns:
        ID of the deleted comment

    Raises:
        HTTPException: 400 on malformed ID, 403 without secret or viewer,
            404 if nothing matched
    """
    try:
        request = DeleteCommentRequest(
            comment_id=comment_id,
            secret=secret,
            viewer_email=jwt_service.get_viewer_email(token),
        )
        return await delete_comment_use_case.execute(request)
    except DomainError as e:
        raise _to_http_exception(e) from e


@legacy_router.get("", response_model=list[CommentThreadItem])
async def list_comment_threads(
    list_comment_threads_use_case: FromDishka[ListCommentThreadsUseCase],
    jwt_service: FromDishka[JWTService],
    page_id: str | None = Query(default=None, alias="pageId"),
    domain: str | None = Query(default=None),
    token: str | None = Header(default=None),
) -> list[CommentThreadItem]:
    """List every top-level comment with its replies embedded.

    Not paginated; replies are one level deep and newest first.
    """
    try:
        request = ListCommentThreadsRequest(
            page_id=page_id,
            domain=domain,
            viewer_email=jwt_service.get_viewer_email(token),
        )
        return await list_comment_threads_use_case.execute(request)
    except DomainError as e:
        raise _to_http_exception(e) from e
