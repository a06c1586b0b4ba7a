"""
    Implementation of the ring router node

    The router owns a consistent hash ring of backend addresses. It answers
    which backend owns a key and forwards key-value requests to that backend.
"""

from flask import Flask, request, jsonify
import logging
import os
import threading
from urllib.parse import quote

import requests

from ring_router import myconstants
from ring_router.consistent_hash import ConsistentHashRing

logger = logging.getLogger(__name__)


def parse_labels(value):
    """
    Function used to turn a comma separated string (or a list) of node
    labels into a list, dropping empty labels
    :param value: e.g. '10.10.0.2:13800,10.10.0.3:13800'
    :return labels: list of labels, None if value has the wrong type
    """
    if isinstance(value, str):
        value = value.split(',')

    if not isinstance(value, list):
        return None

    return [label.strip() for label in value if isinstance(label, str) and label.strip()]


class RouterNodeWrapper(object):
    """
        Class object to wrap around Flask server and
        the consistent hash ring it routes with
    """
    def __init__(self, ip, port, view, replicas, hash_fn=None):
        self.app = Flask(__name__)                  # The Flask Server (Node)
        self.ip = ip
        self.port = port
        self.view = parse_labels(view) or []        # Backend addresses on the ring
        self.replicas = replicas
        self.hash_fn = hash_fn
        self.ring = ConsistentHashRing(replicas, hash_fn)
        self.lock = threading.Lock()                # Guards every ring access


    def setup_routes(self):
        """
        Method used to set up the url rules for the Flask app
            /ring/nodes
            /ring/nodes/<node>
            /ring/view-change
            /ring/keys/<key>
            /kvs/keys/<key>
        :return None:
        """
        self.app.add_url_rule(
                rule='/ring/nodes', endpoint='nodes', view_func=self.nodes, methods=['GET', 'PUT'])
        self.app.add_url_rule(
                rule='/ring/nodes/<string:node>', endpoint='remove_node', view_func=self.remove_node, methods=['DELETE'])
        self.app.add_url_rule(
                rule='/ring/view-change', endpoint='view_change', view_func=self.view_change, methods=['PUT'])
        self.app.add_url_rule(
                rule='/ring/keys/<string:key>', endpoint='owner', view_func=self.owner, methods=['GET'])

        """
            Proxy Routes
            /kvs/keys/<key>
        """
        self.app.add_url_rule(
                rule='/kvs/keys/<string:key>', endpoint='proxy_keys', view_func=self.proxy_keys, methods=['GET', 'PUT', 'DELETE'])


    def setup_view(self):
        """
        Method to setup the initial ring membership. The VIEW environment
        variable wins over the view given on the command line
        :return None:
        """
        view_string = os.environ.get('VIEW')

        if view_string:
            # This is for deployment environment
            self.view = parse_labels(view_string)

        with self.lock:
            self.ring = ConsistentHashRing(self.replicas, self.hash_fn)
            self.ring.add(*self.view)

        logger.info('Ring started with %d nodes and %d replicas each', len(self.view), self.replicas)


    def run(self):
        """
        Method to start flask server
        :return None:
        """
        self.app.run(host=self.ip, port=self.port, threaded=True)


    def membership(self):
        """
        Method used to describe the current ring
        :return response: dictionary with nodes, replicas and position count
        """
        with self.lock:
            return {
                'nodes': self.ring.get_nodes(),
                'replicas': self.ring.replicas,
                'positions': len(self.ring),
            }


    def nodes(self):
        """
        Method used to list (GET) or add to (PUT) the ring membership
        :return status: the status of the HTTP request
        """
        if request.method == 'GET':
            response = self.membership()
            response['message'] = myconstants.RING_RETRIEVED_MESSAGE

            return jsonify(response), 200

        contents = request.get_json(silent=True)

        if not isinstance(contents, dict):
            return jsonify(myconstants.BAD_FORMAT_RESPONSE), 400

        labels = parse_labels(contents.get('nodes'))

        if not labels:
            return jsonify(myconstants.MISSING_NODES_RESPONSE), 400

        with self.lock:
            self.ring.add(*labels)

        logger.info('Added nodes %s', labels)

        response = self.membership()
        response['message'] = myconstants.NODES_ADDED_MESSAGE

        return jsonify(response), 200


    def remove_node(self, node):
        """
        Method used to take a node off the ring
        :param node: node label in API call (e.g. http://127.0.0.1:13800/ring/nodes/<node>)
        :return status: the status of the HTTP DELETE request
        """
        with self.lock:
            removed = self.ring.remove(node)

        if not removed:
            return jsonify(myconstants.UNKNOWN_NODE_RESPONSE), 404

        logger.info('Removed node %s', node)

        response = self.membership()
        response['message'] = myconstants.NODE_REMOVED_MESSAGE

        return jsonify(response), 200


    def view_change(self):
        """
        Method used to replace the whole ring membership with a new view.
        The ring is rebuilt from scratch with the same replicas and hash
        :return status: the status of the HTTP PUT request
        """
        contents = request.get_json(silent=True)

        if not isinstance(contents, dict):
            return jsonify(myconstants.BAD_FORMAT_RESPONSE), 400

        view_list = parse_labels(contents.get('view'))

        if view_list is None:
            return jsonify(myconstants.MISSING_VIEW_RESPONSE), 400

        ring = ConsistentHashRing(self.replicas, self.hash_fn)
        ring.add(*view_list)

        with self.lock:
            self.ring = ring
            self.view = view_list

        logger.info('View changed to %s', view_list)

        response = self.membership()
        response['message'] = myconstants.VIEW_CHANGE_MESSAGE

        return jsonify(response), 200


    def owner(self, key):
        """
        Method used to tell which node owns a key
        :param key: key in API call (e.g. http://127.0.0.1:13800/ring/keys/<key>)
        :return status: the owning node, 503 if the ring has no nodes
        """
        response = {}

        with self.lock:
            node = self.ring.get(key)

        if not node:
            response['error'] = myconstants.NO_NODES_ERROR
            response['message'] = 'Error in GET'
            return jsonify(response), 503

        response['message'] = myconstants.OWNER_RETRIEVED_MESSAGE
        response['key'] = key
        response['node'] = node

        return jsonify(response), 200


    def proxy_keys(self, key):
        """
        Method used to forward GET, PUT and DELETE requests to the node
        owning the key
        :param key: key in API call (e.g. http://127.0.0.1:13800/kvs/keys/<key>)
        :return: response from owning node, and status code from owning node
        """
        response = {}
        error_message = 'Error in {0}'.format(request.method)

        with self.lock:
            node = self.ring.get(key)

        if not node:
            response['error'] = myconstants.NO_NODES_ERROR
            response['message'] = error_message
            return jsonify(response), 503

        url = os.path.join('http://', node, 'kvs/keys', quote(key, safe=''))

        try:
            if request.method == 'GET':
                resp = requests.get(url, timeout=myconstants.TIMEOUT)
            elif request.method == 'PUT':
                resp = requests.put(url, json=request.get_json(silent=True), timeout=myconstants.TIMEOUT)
            else:
                resp = requests.delete(url, timeout=myconstants.TIMEOUT)
        except (requests.Timeout, requests.exceptions.ConnectionError):
            logger.warning('Cannot contact node %s for key %s', node, key)
            response['error'] = myconstants.NODE_DOWN_ERROR
            response['message'] = error_message
            response['node'] = node
            return jsonify(response), 503

        headers = {'Content-Type': resp.headers.get('Content-Type', 'application/json')}

        return resp.text, resp.status_code, headers
