"""Anti-bot interstitials and other non-JSON bodies"""

CHALLENGE_PAGES = {
    "cloudflare_just_a_moment": (
        "<!DOCTYPE html><html><head><title>Just a moment...</title></head>"
        "<body><div id='challenge-platform'></div>"
        "<script src='/cdn-cgi/challenge-platform/h/b/orchestrate/jsch/v1'></script>"
        "</body></html>"
    ),
    "cloudflare_attention": (
        "<html><head><title>Attention Required! | Cloudflare</title></head>"
        "<body><h1>Sorry, you have been blocked</h1></body></html>"
    ),
    "forbidden_text": "403 Forbidden",
    "plain_html": (
        "<html><head><title>AIS Friends</title></head>"
        "<body><p>Welcome</p></body></html>"
    ),
}
