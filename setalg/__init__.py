from .hash_set import HashSet
from .codec import ElementCodec, EncodingError, DecodingError, register_encoder
from .utils.type import undefined
