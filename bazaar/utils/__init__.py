from .map_to_dict import map_user_to_public_dict, map_friend_request_to_public_dict
