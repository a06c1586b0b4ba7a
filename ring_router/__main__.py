"""
    Main entrance of the ring router


    VIEW and REPLICAS environment variables will be set in deployment
"""

import argparse
import logging
import os
import sys

from ring_router import myconstants
from ring_router.router_node import RouterNodeWrapper


def handle_args(argv=None):
    """
    Function used to handle command line arguments
    """
    parser = argparse.ArgumentParser(description='Router placing keys on backend nodes with a consistent hash ring')

    parser.add_argument('-i', '--ip', dest='ip', default=myconstants.IP_ADDRESS,
        help='IP Address for the router to listen on. Value defaults to 0.0.0.0 if no argument provided')

    parser.add_argument('-p', '--port', dest='port', type=int, default=myconstants.PORT,
        help='Port for the router to listen on. Value defaults to 13800 if no argument provided')

    parser.add_argument('-v', '--view', dest='view', default='',
        help='Initial comma separated list of backend addresses placed on the ring')

    parser.add_argument('-r', '--replicas', dest='replicas', type=int,
        default=os.environ.get('REPLICAS', str(myconstants.REPLICAS)),
        help='Number of virtual positions each backend gets on the ring')

    parser.add_argument('-l', '--log-level', dest='log_level', default=myconstants.LOG_LEVEL,
        help='Logging level, e.g. DEBUG or INFO')

    return parser.parse_args(argv)


def setup_logging(level):
    """
    Function used to send log records to stdout
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    logging.getLogger('urllib3').setLevel(logging.WARNING)


def main(argv=None):
    """
        Code main entrance
    """
    args = handle_args(argv)
    setup_logging(args.log_level)

    app = RouterNodeWrapper(args.ip, args.port, args.view, args.replicas)
    app.setup_routes()
    app.setup_view()
    app.run()


if __name__ == '__main__':
    main()
