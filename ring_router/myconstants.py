PORT = 13800
IP_ADDRESS = '0.0.0.0'
REPLICAS = 100
LOG_LEVEL = 'INFO'
TIMEOUT = 3

RING_RETRIEVED_MESSAGE = 'Ring membership retrieved successfully'
NODES_ADDED_MESSAGE = 'Nodes added successfully'
NODE_REMOVED_MESSAGE = 'Node removed successfully'
VIEW_CHANGE_MESSAGE = 'View change successful'
OWNER_RETRIEVED_MESSAGE = 'Owner retrieved successfully'

BAD_FORMAT_RESPONSE = {
    "error": "Bad json format",
    "message": "Error in PUT"
}

MISSING_NODES_RESPONSE = {
    "error": "Nodes are missing",
    "message": "Error in PUT"
}

MISSING_VIEW_RESPONSE = {
    "error": "View is missing",
    "message": "Error in PUT"
}

UNKNOWN_NODE_RESPONSE = {
    "error": "Node is not on the ring",
    "message": "Error in DELETE"
}

NO_NODES_ERROR = 'No nodes available'
NODE_DOWN_ERROR = 'Owning node is down'
