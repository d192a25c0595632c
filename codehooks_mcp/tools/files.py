"""Code deployment and static file tools."""

from __future__ import annotations

import base64
import binascii
import logging

from codehooks_mcp.context import Credentials
from codehooks_mcp.errors import InvalidArgumentsError
from codehooks_mcp.staging import StagedFile, build_manifest
from codehooks_mcp.tools.argv import option, project_args, switch
from codehooks_mcp.tools.registry import ToolContext, ToolDescriptor
from codehooks_mcp.tools.schemas import DeployCodeArgs, FileDeleteArgs, FileListArgs, FileUploadArgs

logger = logging.getLogger("codehooks-mcp.tools")

DEFAULT_PROJECT_NAME = "codehooks-project"

DEPLOY_DESCRIPTION = """Deploy JavaScript code to a Codehooks.io project.

MINIMAL WORKING EXAMPLE:
```javascript
import { app } from 'codehooks-js';

app.get('/hello', (req, res) => {
  res.json({ message: 'Hello, world!' });
});

// MANDATORY: bind to serverless runtime
export default app.init();
```

KEY REQUIREMENTS:
- Always import from 'codehooks-js'
- Always end with `export default app.init();`
- A package.json is created when none is supplied; supplied fields override the defaults
- Dependencies are installed before deploying

Use the 'docs' tool for more examples."""


def deploy_argv(creds: Credentials, args: DeployCodeArgs) -> list[str]:
    return [
        "deploy",
        "--projectname",
        args.projectId or creds.project,
        "--space",
        args.spaceId or creds.space,
        "--main",
        args.main,
        *switch("--json", args.json_),
    ]


async def deploy_code(ctx: ToolContext, args: DeployCodeArgs) -> str:
    creds = ctx.credentials
    files = build_manifest(
        (StagedFile(f.path, f.content) for f in args.files),
        name=args.projectId or creds.project or DEFAULT_PROJECT_NAME,
        main=args.main,
    )
    logger.info(f"Deploying {len(files)} files")

    async with ctx.staging.stage(
        files, prefix="codehooks-deploy-", preserve_on_failure=True
    ) as workdir:
        logger.info("Installing dependencies...")
        install = await ctx.executor.run_program(
            list(ctx.install_command), cwd=workdir, timeout=ctx.install_timeout
        )
        logger.debug(f"Install output: {install.output}")

        logger.info("Executing deploy command...")
        result = await ctx.executor.run(deploy_argv(creds, args), cwd=workdir)

    return result.output or "Deployment successful"


def decode_upload(args: FileUploadArgs) -> str | bytes:
    if args.encoding != "base64":
        return args.content
    try:
        return base64.b64decode(args.content, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentsError(f"content is not valid base64: {e}") from None


async def file_upload(ctx: ToolContext, args: FileUploadArgs) -> str:
    payload = decode_upload(args)
    async with ctx.staging.stage_one(payload, name=args.target, prefix="upload-") as path:
        result = await ctx.executor.run(
            [
                "file-upload",
                *project_args(ctx.credentials, project_flag="--projectname"),
                "--src",
                str(path),
                "--target",
                args.target,
            ]
        )
    return result.output


async def file_delete(ctx: ToolContext, args: FileDeleteArgs) -> str:
    result = await ctx.executor.run(
        [
            "file-delete",
            *project_args(ctx.credentials, project_flag="--projectname"),
            *option("--filename", args.filename),
            *option("--match", args.match),
            *switch("--dryrun", args.dryrun),
        ]
    )
    return result.output


async def file_list(ctx: ToolContext, args: FileListArgs) -> str:
    argv = ["file-list", *project_args(ctx.credentials)]
    if args.path:
        argv.append(args.path)
    result = await ctx.executor.run(argv)
    return result.output


DESCRIPTORS = [
    ToolDescriptor(
        name="deploy_code",
        description=DEPLOY_DESCRIPTION,
        model=DeployCodeArgs,
        handler=deploy_code,
    ),
    ToolDescriptor(
        name="file_upload",
        description="Upload file content (text or base64) to the server at the target path",
        model=FileUploadArgs,
        handler=file_upload,
    ),
    ToolDescriptor(
        name="file_delete",
        description="Delete a file from server, by exact filename or by regular expression match",
        model=FileDeleteArgs,
        handler=file_delete,
    ),
    ToolDescriptor(
        name="file_list",
        description="List files from server",
        model=FileListArgs,
        handler=file_list,
    ),
]
