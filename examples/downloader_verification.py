"""Downloader Verification -- deadlock checking of channel-based designs.

Loads the downloader variants under examples/networks/ and reports, for
each, whether it can deadlock and how.
"""

from pathlib import Path

from cfsm_verifier import explore, format_state, format_trace, load_file, load_network

NETWORKS = Path(__file__).parent / "networks"

# =============================================================
# Example 1: Variants from files
# =============================================================
for path in sorted(NETWORKS.glob("downloader*.cfsm")):
    print(f"=== {path.name} ===")
    network = load_file(path)
    print(f"Processes: {network}")
    print(f"Channels: {' '.join(network.channels)}")
    result = explore(network)
    if result.has_deadlock:
        print(f"Deadlock at {format_state(network, result.deadlock)}")
        for line in format_trace(network, result.trace):
            print(f"  {line}")
    print(f"Analyzed {result.num_states} states\n")

# =============================================================
# Example 2: Inline network with priorities
# =============================================================
print("=== Priorities ===")

network = load_network(
    """
    P
    s0 a!@1 s1
    s0 b!@0 s1
    .
    Q
    s0 b?@0 s1
    .
    """
)
result = explore(network)
# Only b can fire: a has no partner, so P commits to b
for line in format_trace(network, result.trace):
    print(line)

print("\nDone.")
