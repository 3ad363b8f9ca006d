"""Django management command to run the JSON API server."""

import logging
import os
import sys
from typing import Any, final, override

from cheroot.wsgi import Server as WSGIServer
from django.conf import settings
from django.core.management.base import BaseCommand
from django.core.wsgi import get_wsgi_application

from server.apps.core.services import close_services, get_services

logger = logging.getLogger(__name__)

# Environment variable to indicate we're in a reload subprocess
_RELOAD_ENV_VAR = 'API_RELOAD_SUBPROCESS'


@final
class Command(BaseCommand):
    """Run the files manager API using cheroot WSGI server."""

    help = 'Run the files manager JSON API server'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--host',
            type=str,
            default=None,
            help='Host to bind to (default: from settings)',
        )
        parser.add_argument(
            '--port',
            type=int,
            default=None,
            help='Port to bind to (default: from settings)',
        )
        parser.add_argument(
            '--threads',
            type=int,
            default=10,
            help='Number of worker threads (default: 10)',
        )
        parser.add_argument(
            '--reload',
            action='store_true',
            default=False,
            help='Enable auto-reload on code changes (development only)',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the command.

        Args:
            args: Positional arguments.
            options: Keyword arguments from command line.
        """
        use_reload = options['reload']
        is_subprocess = os.environ.get(_RELOAD_ENV_VAR) == 'true'

        if use_reload and not is_subprocess:
            self._run_with_reload(options)
        else:
            self._run_server(options)

    def _run_server(self, options: dict[str, Any]) -> None:
        """Run the API server directly.

        Each request is served by a worker thread of the pool, so
        blocking store calls never stall other requests.

        Args:
            options: Command options.
        """
        host = options['host'] or settings.API_HOST
        port = options['port'] or settings.API_PORT

        self.stdout.write(
            self.style.SUCCESS(f'Starting API server on {host}:{port}'),
        )

        # Wire components before accepting traffic
        get_services()

        server = WSGIServer(
            bind_addr=(host, port),
            wsgi_app=get_wsgi_application(),
            numthreads=options['threads'],
        )
        server.server_name = 'FilesManager-API'

        try:
            logger.info('API server starting on %s:%d', host, port)
            server.start()
        except KeyboardInterrupt:
            self.stdout.write(self.style.WARNING('\nShutting down...'))
        finally:
            server.stop()
            close_services()
            self.stdout.write(self.style.SUCCESS('API server stopped'))

    def _run_with_reload(self, options: dict[str, Any]) -> None:
        """Run server with auto-reload on file changes.

        Uses watchfiles to monitor Python files and restart the server
        when changes are detected.

        Args:
            options: Command options.
        """
        try:
            import watchfiles  # noqa: PLC0415
        except ImportError:
            self.stderr.write(
                self.style.ERROR(
                    'watchfiles is required for --reload. '
                    'Install with: pip install "files-manager[dev]"',
                ),
            )
            sys.exit(1)

        self.stdout.write(
            self.style.SUCCESS('Starting API server with auto-reload enabled...'),
        )

        cmd_parts = [sys.executable, '-m', 'django', 'run_api_server']
        if options['host']:
            cmd_parts.extend(['--host', options['host']])
        if options['port']:
            cmd_parts.extend(['--port', str(options['port'])])
        cmd_parts.extend(['--threads', str(options['threads'])])
        cmd = ' '.join(cmd_parts)

        def watch_filter(  # noqa: WPS430
            change: watchfiles.Change,
            path: str,
        ) -> bool:
            """Filter to only watch Python files."""
            return path.endswith('.py')

        os.environ[_RELOAD_ENV_VAR] = 'true'

        watchfiles.run_process(
            str(settings.BASE_DIR / 'server'),
            target=cmd,
            target_type='command',
            watch_filter=watch_filter,
            callback=self._on_reload,
        )

    def _on_reload(self, changes: set[tuple[Any, str]]) -> None:
        """Callback when files change and reload is triggered.

        Args:
            changes: Set of (change_type, path) tuples.
        """
        for change_type, path in changes:
            self.stdout.write(
                self.style.WARNING(f'Detected {change_type.name}: {path}'),
            )
        self.stdout.write(self.style.SUCCESS('Reloading API server...'))
