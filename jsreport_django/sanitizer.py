"""
Sanitizer for captured HTML

Removes the script block Visual Studio Browser Link injects into pages
served during development. The block breaks rendering on the jsreport
server. This is not general HTML sanitization.
"""

BROWSER_LINK_START = '<!-- Visual Studio Browser Link -->'
BROWSER_LINK_END = '<!-- End Browser Link -->'


def remove_browser_link(content: str) -> str:
    """
    Strip the injected Browser Link block from HTML.
    
    Only the first start marker and the first end marker are considered.
    The span between them is removed together with both markers.
    
    Args:
        content: Captured HTML
        
    Returns:
        HTML without the Browser Link block, or the input unchanged if
        either marker is missing
    """
    start = content.find(BROWSER_LINK_START)
    end = content.find(BROWSER_LINK_END)
    
    if start == -1 or end == -1 or end < start:
        return content
    
    return content[:start] + content[end + len(BROWSER_LINK_END):]
