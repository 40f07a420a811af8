# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Constants for the request input sources."""

# Session fingerprint markers
SESSION_SERVER_GENERATED_SID = 'Server Generated SID'
SESSION_REMOTE_ADDRESS = 'Remote Address'
SESSION_USER_AGENT = 'User Agent'
SESSION_EXPIRES = 'Expires'
SESSION_MARKERS = (SESSION_SERVER_GENERATED_SID, SESSION_REMOTE_ADDRESS, SESSION_USER_AGENT, SESSION_EXPIRES)

# Fallbacks used when the request does not carry the metadata
DEFAULT_REMOTE_ADDRESS = 'localhost'
DEFAULT_USER_AGENT = 'Unknown HTTP User Agent'

# Session lifetimes in seconds
DEFAULT_SESSION_LIFETIME = 30 * 60
DEFAULT_STORE_LIFETIME = 24 * 60 * 60

# Constants for content types
CONTENT_TYPE_JSON = 'application/json'
CONTENT_TYPE_FORM = 'application/x-www-form-urlencoded'

# Header names, lower case
HEADER_CONTENT_TYPE = 'content-type'
HEADER_USER_AGENT = 'user-agent'
HEADER_FORWARDED_FOR = 'x-forwarded-for'
HEADER_SESSION_ID = 'session-id'

# PHP style array notation for repeated parameters, e.g. tag[]=a&tag[]=b
ARRAY_PARAM_SUFFIX = '[]'
