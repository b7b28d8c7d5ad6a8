"""Internal constants shared across the library."""

BASE_URL = "http://www.woopra.com/track/"
IDENTIFY_PATH = "identify/"
TRACK_PATH = "ce/"
USER_AGENT = "pywoopra"
DEFAULT_REQUEST_TIMEOUT = 5.0

COOKIE_NAME = "wooTracker"
COOKIE_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
COOKIE_LENGTH = 12

PAGEVIEW_EVENT = "pv"

# Asynchronous loader for the browser agent; defines the ``woopra`` stub
# that queues calls until ``//static.woopra.com/js/w.js`` has loaded.
LOADER_JS = (
    "(function(){\n"
    'var t,i,e,n=window,o=document,a=arguments,s="script",'
    'r=["config","track","identify","visit","push","call"],'
    "c=function(){var t,i=this;for(i._e=[],t=0;r.length>t;t++)(function(t){i[t]=function(){"
    "return i._e.push([t].concat(Array.prototype.slice.call(arguments,0))),i}})(r[t])};"
    "for(n._w=n._w||{},t=0;a.length>t;t++)n._w[a[t]]=n[a[t]]=n[a[t]]||new c;"
    'i=o.createElement(s),i.async=1,i.src="//static.woopra.com/js/w.js",'
    "e=o.getElementsByTagName(s)[0],e.parentNode.insertBefore(i,e)\n"
    '})("woopra");'
)
